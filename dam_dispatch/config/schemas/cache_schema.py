"""Query result cache configuration schema."""
from datetime import timedelta
from typing import Optional

from pydantic import BaseModel, Field, field_validator


class CacheConfig(BaseModel):
    """Query result cache configuration."""

    enabled: bool = Field(True, description="Whether query results are cached")
    default_ttl_seconds: int = Field(600, description="Default cache time-to-live in seconds")
    sliding_expiration_seconds: Optional[int] = Field(
        None, description="Expire entries not read for this long (disabled when unset)"
    )

    @field_validator("default_ttl_seconds")
    @classmethod
    def validate_ttl(cls, v: int) -> int:
        """Validate cache TTL."""
        if v < 1:
            raise ValueError("Cache TTL must be at least 1 second")
        return v

    @field_validator("sliding_expiration_seconds")
    @classmethod
    def validate_sliding(cls, v: Optional[int]) -> Optional[int]:
        """Validate sliding expiration."""
        if v is not None and v < 1:
            raise ValueError("Sliding expiration must be at least 1 second")
        return v

    @property
    def default_ttl(self) -> timedelta:
        return timedelta(seconds=self.default_ttl_seconds)

    @property
    def sliding_expiration(self) -> Optional[timedelta]:
        if self.sliding_expiration_seconds is None:
            return None
        return timedelta(seconds=self.sliding_expiration_seconds)
