"""Base DTO and message classes with stable API and clean snake_case format."""
import json
from datetime import datetime, timezone, timedelta
from decimal import Decimal
from enum import Enum
from typing import Any, ClassVar, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class BaseDTO(BaseModel):
    """
    Base class for all DTOs with stable API and clean snake_case format.

    This class provides a future-proof abstraction layer that:
    - Uses pure snake_case internally (Pythonic)
    - Provides stable to_dict()/from_dict() API
    - Abstracts away Pydantic implementation details
    """
    model_config = ConfigDict(frozen=True)

    def to_dict(self) -> Dict[str, Any]:
        """
        Stable public API - returns a JSON-compatible snake_case dictionary.

        Returns:
            Dict with snake_case keys (Pythonic format)
        """
        return self.model_dump(mode="json")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BaseDTO":
        """
        Stable public API - creates instance from snake_case dictionary.

        Args:
            data: Dictionary with snake_case keys

        Returns:
            New instance of the DTO
        """
        return cls.model_validate(data)


def canonical_value(value: Any) -> Any:
    """
    Reduce a dumped field value to a form where equal values look alike.

    Decimals lose trailing zeros and aware datetimes are moved to UTC, so
    ``Decimal("100")`` and ``Decimal("100.00")`` serialize identically.
    """
    if isinstance(value, dict):
        return {key: canonical_value(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [canonical_value(item) for item in value]
    if isinstance(value, Enum):
        return canonical_value(value.value)
    if isinstance(value, Decimal):
        if not value.is_finite():
            return str(value)
        text = format(value.normalize(), "f")
        return "0" if text in ("-0", "0") else text
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value.isoformat()
    return value


# CQRS Base Classes

class BaseMessage(BaseDTO):
    """
    Base class for every message routed through the dispatcher.

    Messages are immutable. Their type tag selects the handler; for queries
    the type tag and field values also form the cache key.
    """
    message_name: ClassVar[Optional[str]] = None

    @classmethod
    def message_type_name(cls) -> str:
        """Type tag used for handler routing and cache keys."""
        return cls.message_name or cls.__name__


class BaseCommand(BaseMessage):
    """Base class for command DTOs. Commands are never cached."""


class BaseQuery(BaseMessage):
    """
    Base class for query DTOs.

    Subclasses opt into result caching with ``cacheable = True`` and may set
    ``cache_ttl`` to override the configured default time-to-live.
    """
    cacheable: ClassVar[bool] = False
    cache_ttl: ClassVar[Optional[timedelta]] = None

    @classmethod
    def cache_prefix(cls) -> str:
        """Prefix shared by every cache key of this query type."""
        return f"{cls.message_type_name()}:"

    def cache_key(self) -> str:
        """
        Derive the cache key for this query.

        The default key is the type tag followed by every field, reduced by
        ``canonical_value`` and serialized to JSON in declaration order.
        Override to customize.
        """
        payload = json.dumps(
            canonical_value(self.model_dump()),
            separators=(",", ":"),
            ensure_ascii=False,
            default=str,
        )
        return f"{self.cache_prefix()}{payload}"


class PaginationRequest(BaseDTO):
    """Base filter carrying 1-based page selection."""
    page_number: int = Field(default=1, description="1-based page number")
    page_size: int = Field(default=10, description="Maximum items per page")
