"""Invoice query handlers."""
from typing import Optional

from dam_dispatch.application.cancellation import CancellationToken
from dam_dispatch.application.decorators import query_handler
from dam_dispatch.application.dto.responses import PaginatedResult
from dam_dispatch.application.interfaces.command_query import QueryHandler
from dam_dispatch.domain.invoice import InvoiceRepository

from .dto import InvoiceDTO
from .queries import GetInvoiceByIdQuery, GetInvoicesQuery


@query_handler(GetInvoicesQuery)
class GetInvoicesHandler(QueryHandler[GetInvoicesQuery, PaginatedResult[InvoiceDTO]]):
    """Lists invoices newest first, optionally above a minimum amount."""

    def __init__(self, repository: InvoiceRepository):
        self.repository = repository

    async def handle(
        self, message: GetInvoicesQuery, cancellation: CancellationToken
    ) -> PaginatedResult[InvoiceDTO]:
        query_filter = message.filter
        invoices = self.repository.find_all()
        if query_filter.min_amount is not None:
            invoices = [i for i in invoices if i.total_amount >= query_filter.min_amount]
        invoices.sort(key=lambda i: i.timestamp, reverse=True)

        cancellation.raise_if_cancelled()
        page = PaginatedResult.from_sequence(
            invoices, query_filter.page_number, query_filter.page_size
        )
        return page.map(InvoiceDTO.from_entity)


@query_handler(GetInvoiceByIdQuery)
class GetInvoiceByIdHandler(QueryHandler[GetInvoiceByIdQuery, Optional[InvoiceDTO]]):
    """Looks up one invoice."""

    def __init__(self, repository: InvoiceRepository):
        self.repository = repository

    async def handle(
        self, message: GetInvoiceByIdQuery, cancellation: CancellationToken
    ) -> Optional[InvoiceDTO]:
        invoice = self.repository.get_by_id(message.id)
        return InvoiceDTO.from_entity(invoice) if invoice is not None else None
