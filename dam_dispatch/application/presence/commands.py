"""Device presence commands."""
from datetime import datetime
from typing import Optional

from dam_dispatch.application.dto.base import BaseCommand


class CreateDevicePresenceCommand(BaseCommand):
    """
    Record that a device was seen during an activity.

    Result: ``int``, the identifier of the new presence record.
    """
    serial_number: str
    timestamp: Optional[datetime] = None
    device_activity_id: int
