"""Invoice data transfer objects."""
from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import Field

from dam_dispatch.application.dto.base import BaseDTO, PaginationRequest
from dam_dispatch.domain.invoice import Invoice


class InvoiceDTO(BaseDTO):
    """Read model of an invoice."""
    id: int
    serial_number: str
    timestamp: datetime
    total_amount: Decimal
    description: str = ""
    device_activity_id: Optional[int] = None

    @classmethod
    def from_entity(cls, invoice: Invoice) -> "InvoiceDTO":
        return cls(
            id=invoice.id,
            serial_number=invoice.serial_number,
            timestamp=invoice.timestamp,
            total_amount=invoice.total_amount,
            description=invoice.description,
            device_activity_id=invoice.device_activity_id,
        )


class InvoiceFilter(PaginationRequest):
    """Invoice listing filter."""
    min_amount: Optional[Decimal] = Field(default=None, description="Minimum total amount")
