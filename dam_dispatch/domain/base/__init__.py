"""Base domain concepts shared by every bounded context."""

from .entity import Entity
from .exceptions import (
    ConfigurationError,
    DomainException,
    HandlerNotFoundError,
    OperationCanceledError,
    ResourceNotFoundError,
    ValidationError,
)

__all__: list[str] = [
    "Entity",
    "DomainException",
    "ValidationError",
    "ResourceNotFoundError",
    "ConfigurationError",
    "HandlerNotFoundError",
    "OperationCanceledError",
]
