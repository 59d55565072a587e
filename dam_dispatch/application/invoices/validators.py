"""Invoice message validation rules."""
from dam_dispatch.application.validation import (
    ValidatorRegistry,
    greater_than,
    greater_than_or_equal,
    is_set,
    pagination_rules,
)

from .queries import GetInvoiceByIdQuery, GetInvoicesQuery

MIN_AMOUNT_REASON = "El monto mínimo no puede ser negativo."
INVOICE_ID_REASON = "Se requiere un ID de factura válido."


def register_validators(registry: ValidatorRegistry) -> None:
    registry.register(
        GetInvoicesQuery,
        *pagination_rules("filter"),
        greater_than_or_equal(
            "filter.min_amount", 0, MIN_AMOUNT_REASON, when=is_set("filter.min_amount")
        ),
    )
    registry.register(GetInvoiceByIdQuery, greater_than("id", 0, INVOICE_ID_REASON))
