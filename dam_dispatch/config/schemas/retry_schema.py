"""Retry configuration schema."""
from pydantic import BaseModel, Field, field_validator, model_validator


class RetryConfig(BaseModel):
    """Handler retry configuration (exponential backoff, no jitter)."""

    max_retries: int = Field(3, description="Retries after the first attempt")
    base_delay: float = Field(1.0, description="Base delay in seconds")
    multiplier: float = Field(2.0, description="Backoff multiplier applied per retry")
    max_delay: float = Field(60.0, description="Upper bound for a single delay in seconds")

    @field_validator("max_retries")
    @classmethod
    def validate_max_retries(cls, v: int) -> int:
        """Validate retry budget."""
        if v < 0:
            raise ValueError("max_retries cannot be negative")
        return v

    @field_validator("base_delay", "multiplier", "max_delay")
    @classmethod
    def validate_positive(cls, v: float) -> float:
        """Validate delay settings."""
        if v <= 0:
            raise ValueError("Delay settings must be positive")
        return v

    @model_validator(mode="after")
    def validate_delay_bounds(self) -> "RetryConfig":
        """Validate relationships between delays."""
        if self.base_delay > self.max_delay:
            raise ValueError("base_delay cannot be greater than max_delay")
        return self
