"""Invoice feature - queries, handlers and validation rules."""

from .dto import InvoiceDTO, InvoiceFilter
from .handlers import GetInvoiceByIdHandler, GetInvoicesHandler
from .queries import GetInvoiceByIdQuery, GetInvoicesQuery
from .validators import register_validators

MESSAGES = (GetInvoicesQuery, GetInvoiceByIdQuery)

__all__: list[str] = [
    "InvoiceDTO",
    "InvoiceFilter",
    "GetInvoicesQuery",
    "GetInvoiceByIdQuery",
    "GetInvoicesHandler",
    "GetInvoiceByIdHandler",
    "register_validators",
    "MESSAGES",
]
