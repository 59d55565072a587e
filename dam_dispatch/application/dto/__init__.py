"""Application DTOs."""

from .base import BaseCommand, BaseDTO, BaseMessage, BaseQuery, PaginationRequest
from .responses import ApiResponse, ErrorCode, PaginatedResult

__all__: list[str] = [
    "BaseDTO",
    "BaseMessage",
    "BaseCommand",
    "BaseQuery",
    "PaginationRequest",
    "ApiResponse",
    "ErrorCode",
    "PaginatedResult",
]
