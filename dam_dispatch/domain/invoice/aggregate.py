"""Invoice entity."""
from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import Field

from dam_dispatch.domain.base.entity import Entity


class Invoice(Entity):
    """An invoice issued for the files moved during one device activity."""

    id: Optional[int] = None
    serial_number: str
    timestamp: datetime
    total_amount: Decimal = Field(default=Decimal("0"), ge=0)
    description: str = ""
    device_activity_id: Optional[int] = None
