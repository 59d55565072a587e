"""Device presence entity."""
from datetime import datetime
from typing import Optional

from dam_dispatch.domain.base.entity import Entity


class DevicePresence(Entity):
    """A single sighting of a connected device during an activity."""

    id: Optional[int] = None
    serial_number: str
    timestamp: datetime
    device_activity_id: int
