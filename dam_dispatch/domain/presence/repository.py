"""Device presence repository port."""
from abc import ABC, abstractmethod
from typing import List, Optional

from .aggregate import DevicePresence


class DevicePresenceRepository(ABC):
    """Storage port for device presence records."""

    @abstractmethod
    def add(self, presence: DevicePresence) -> DevicePresence:
        """Persist a new presence record and return it with its identifier assigned."""

    @abstractmethod
    def get_by_id(self, presence_id: int) -> Optional[DevicePresence]:
        """Return the presence record with the given identifier, or None."""

    @abstractmethod
    def find_all(self) -> List[DevicePresence]:
        """Return every stored presence record."""
