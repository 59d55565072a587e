"""Dispatcher configuration schema."""
from pydantic import BaseModel, Field


class DispatchConfig(BaseModel):
    """Dispatcher behaviour configuration."""

    expose_error_details: bool = Field(
        False,
        description="Return exception details to callers (development only)",
    )
    verify_on_startup: bool = Field(
        True, description="Fail startup when a known message type has no handler"
    )
