"""HTTP adapter - FastAPI routers that translate requests into dispatched messages."""
