"""Invoice queries."""
from datetime import timedelta

from pydantic import Field

from dam_dispatch.application.dto.base import BaseQuery

from .dto import InvoiceFilter


class GetInvoicesQuery(BaseQuery):
    """
    Page through the invoice history, newest first.

    Result: ``PaginatedResult[InvoiceDTO]``
    """
    cacheable = True

    filter: InvoiceFilter = Field(default_factory=InvoiceFilter)


class GetInvoiceByIdQuery(BaseQuery):
    """
    Detail of a single invoice.

    Result: ``Optional[InvoiceDTO]``; None when the invoice does not exist.
    """
    cacheable = True
    cache_ttl = timedelta(minutes=30)

    id: int
