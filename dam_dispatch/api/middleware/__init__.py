"""API middleware."""

from .logging_middleware import LoggingMiddleware

__all__: list[str] = ["LoggingMiddleware"]
