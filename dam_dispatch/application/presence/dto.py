"""Device presence data transfer objects."""
from datetime import datetime
from typing import Optional

from pydantic import Field

from dam_dispatch.application.dto.base import BaseDTO, PaginationRequest
from dam_dispatch.domain.presence import DevicePresence


class DevicePresenceDTO(BaseDTO):
    """Read model of a device presence event."""
    id: int
    serial_number: str
    timestamp: datetime
    device_activity_id: int

    @classmethod
    def from_entity(cls, presence: DevicePresence) -> "DevicePresenceDTO":
        return cls(
            id=presence.id,
            serial_number=presence.serial_number,
            timestamp=presence.timestamp,
            device_activity_id=presence.device_activity_id,
        )


class PresenceFilter(PaginationRequest):
    """Presence listing filter."""
    activity_id: Optional[int] = Field(default=None, description="Only presences of this activity")
