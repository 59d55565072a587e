"""Port for the query result cache, as seen by command handlers."""
from abc import ABC, abstractmethod
from datetime import timedelta
from typing import Any, Optional


class CachePort(ABC):
    """Key/value cache with per-entry expiration."""

    @abstractmethod
    def get(self, key: str) -> Optional[Any]:
        """Return the cached value, or None on a miss."""
        pass

    @abstractmethod
    def set(self, key: str, value: Any, ttl: Optional[timedelta] = None) -> None:
        """Store a value; ``ttl`` defaults to the store's default."""
        pass

    @abstractmethod
    def remove(self, key: str) -> None:
        """Drop one entry. Removing a missing key is a no-op."""
        pass

    @abstractmethod
    def invalidate_prefix(self, prefix: str) -> int:
        """Drop every entry whose key starts with ``prefix``; return how many."""
        pass
