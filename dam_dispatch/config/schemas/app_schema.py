"""Main application configuration schema."""
from typing import Any, Dict

from pydantic import BaseModel, Field, model_validator

from .cache_schema import CacheConfig
from .dispatch_schema import DispatchConfig
from .logging_schema import LoggingConfig
from .retry_schema import RetryConfig
from .server_schema import ServerConfig


class AppConfig(BaseModel):
    """Application configuration."""

    version: str = Field("1.0.0", description="Configuration version")
    environment: str = Field("production", description="Environment")
    debug: bool = Field(False, description="Debug mode")
    logging: LoggingConfig = Field(default_factory=lambda: LoggingConfig())
    cache: CacheConfig = Field(default_factory=lambda: CacheConfig())
    retry: RetryConfig = Field(default_factory=lambda: RetryConfig())
    dispatch: DispatchConfig = Field(default_factory=lambda: DispatchConfig())
    server: ServerConfig = Field(default_factory=lambda: ServerConfig())

    @model_validator(mode="after")
    def expose_details_in_development(self) -> "AppConfig":
        """Development environments see exception details in error envelopes."""
        if self.environment.lower() == "development" and not self.dispatch.expose_error_details:
            object.__setattr__(
                self,
                "dispatch",
                self.dispatch.model_copy(update={"expose_error_details": True}),
            )
        return self

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AppConfig":
        return cls.model_validate(data)

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(mode="json")
