"""Invoice API routes."""
from decimal import Decimal
from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from dam_dispatch.api.dependencies import get_cancellation, get_dispatcher
from dam_dispatch.api.responses import envelope_to_response, not_found
from dam_dispatch.application.cancellation import CancellationToken
from dam_dispatch.application.dto.responses import ApiResponse
from dam_dispatch.application.invoices import (
    GetInvoiceByIdQuery,
    GetInvoicesQuery,
    InvoiceFilter,
)
from dam_dispatch.infrastructure.dispatch import Dispatcher

router = APIRouter(prefix="/invoices", tags=["Invoices"])


@router.get("", summary="List Invoices", description="Invoice history, newest first")
async def list_invoices(
    page_number: int = Query(1, description="1-based page number"),
    page_size: int = Query(10, description="Invoices per page"),
    min_amount: Optional[Decimal] = Query(None, description="Minimum total amount"),
    dispatcher: Dispatcher = Depends(get_dispatcher),
    cancellation: CancellationToken = Depends(get_cancellation),
) -> JSONResponse:
    """
    List invoices.

    - **page_number**: Page to return, starting at 1
    - **page_size**: Between 1 and 100
    - **min_amount**: Only invoices of at least this amount
    """
    query = GetInvoicesQuery(
        filter=InvoiceFilter(page_number=page_number, page_size=page_size, min_amount=min_amount)
    )
    return envelope_to_response(await dispatcher.query(query, cancellation))


@router.get("/{invoice_id}", summary="Get Invoice", description="Get one invoice by id")
async def get_invoice(
    invoice_id: int,
    dispatcher: Dispatcher = Depends(get_dispatcher),
    cancellation: CancellationToken = Depends(get_cancellation),
) -> JSONResponse:
    response = await dispatcher.query(GetInvoiceByIdQuery(id=invoice_id), cancellation)
    if response.success and response.data is None:
        return not_found(f"No se encontró factura con ID: {invoice_id}")
    if response.success:
        response = ApiResponse.ok(response.data, message="Factura recuperada correctamente")
    return envelope_to_response(response)
