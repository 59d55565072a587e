"""Device presence bounded context."""

from .aggregate import DevicePresence
from .repository import DevicePresenceRepository

__all__: list[str] = ["DevicePresence", "DevicePresenceRepository"]
