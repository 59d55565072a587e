"""Invoice bounded context."""

from .aggregate import Invoice
from .repository import InvoiceRepository

__all__: list[str] = ["Invoice", "InvoiceRepository"]
