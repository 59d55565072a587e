"""API routers."""

from .invoices import router as invoices_router
from .presence import router as presence_router

__all__: list[str] = ["invoices_router", "presence_router"]
