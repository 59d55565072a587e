"""Domain exception hierarchy."""
from typing import Any, List, Optional


class DomainException(Exception):
    """Base exception for all domain-specific errors.

    Messages of domain exceptions are written for API consumers and may be
    returned to callers as-is.
    """
    pass


class ValidationError(DomainException):
    """Raised when domain validation fails."""
    def __init__(self, message: str, details: Any = None):
        super().__init__(message)
        self.details = details


class ResourceNotFoundError(DomainException):
    """Raised when a requested resource cannot be found."""
    def __init__(self, resource_type: str, resource_id: Any):
        super().__init__(f"{resource_type} with ID {resource_id} not found")
        self.resource_type = resource_type
        self.resource_id = resource_id


class ConfigurationError(Exception):
    """Raised when the application is wired incorrectly."""
    def __init__(self, message: str, missing_fields: Optional[List[str]] = None):
        super().__init__(message)
        self.missing_fields = missing_fields or []


class HandlerNotFoundError(ConfigurationError):
    """Raised when no handler is registered for a message type."""
    def __init__(self, message_type: str):
        super().__init__(f"No handler registered for message type: {message_type}")
        self.message_type = message_type


class OperationCanceledError(Exception):
    """Raised when a caller abandons an operation through its cancellation token."""
    def __init__(self, message: str = "The operation was canceled"):
        super().__init__(message)
