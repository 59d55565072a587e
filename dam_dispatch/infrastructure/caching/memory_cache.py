"""In-process cache store with per-entry expiration."""
import threading
import time
from dataclasses import dataclass
from datetime import timedelta
from typing import Any, Callable, Dict, Optional

from dam_dispatch.application.interfaces.cache_port import CachePort
from dam_dispatch.infrastructure.logging.logger import get_logger

DEFAULT_TTL = timedelta(minutes=10)

logger = get_logger(__name__)


@dataclass(frozen=True)
class CacheEntry:
    """Immutable cache slot; replaced as a whole on every write."""
    value: Any
    expires_at: float
    last_access: float


class MemoryCacheStore(CachePort):
    """
    Thread-safe key/value store with TTL-based expiration.

    Expiration is evaluated lazily: an expired entry is treated as a miss
    and evicted on access, or by ``purge_expired``. Values are never None,
    so ``get`` returning None always means a miss.

    With ``sliding_expiration`` set, an entry also expires when it has not
    been read for that long; reads never extend it past its absolute expiry.
    """

    def __init__(
        self,
        default_ttl: timedelta = DEFAULT_TTL,
        sliding_expiration: Optional[timedelta] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        if default_ttl.total_seconds() <= 0:
            raise ValueError("default_ttl must be positive")
        self._default_ttl = default_ttl
        self._sliding = sliding_expiration.total_seconds() if sliding_expiration else None
        self._clock = clock
        self._entries: Dict[str, CacheEntry] = {}
        self._lock = threading.RLock()
        self._hits = 0
        self._misses = 0
        self._evictions = 0

    @property
    def default_ttl(self) -> timedelta:
        return self._default_ttl

    @staticmethod
    def _check_key(key: str) -> None:
        if not key or not key.strip():
            raise ValueError("Cache key cannot be empty")

    def _is_expired(self, entry: CacheEntry, now: float) -> bool:
        if now >= entry.expires_at:
            return True
        return self._sliding is not None and now - entry.last_access >= self._sliding

    def get(self, key: str) -> Optional[Any]:
        """
        Get a cached value.

        Args:
            key: Cache key

        Returns:
            The cached value, or None on a miss or an expired entry
        """
        self._check_key(key)
        with self._lock:
            entry = self._entries.get(key)
            now = self._clock()
            if entry is None:
                self._misses += 1
                return None
            if self._is_expired(entry, now):
                del self._entries[key]
                self._evictions += 1
                self._misses += 1
                logger.debug("Cache entry expired", key=key)
                return None
            if self._sliding is not None:
                self._entries[key] = CacheEntry(entry.value, entry.expires_at, now)
            self._hits += 1
            return entry.value

    def set(self, key: str, value: Any, ttl: Optional[timedelta] = None) -> None:
        """
        Store a value, replacing any previous entry for the key.

        Args:
            key: Cache key
            value: Value to cache; None cannot be cached
            ttl: Time-to-live; the store default when omitted
        """
        self._check_key(key)
        if value is None:
            raise ValueError("Cannot cache a None value")
        if ttl is None:
            ttl = self._default_ttl
        if ttl.total_seconds() <= 0:
            raise ValueError("ttl must be positive")
        with self._lock:
            now = self._clock()
            self._entries[key] = CacheEntry(value, now + ttl.total_seconds(), now)
        logger.debug("Cached value", key=key, ttl_seconds=ttl.total_seconds())

    def remove(self, key: str) -> None:
        """Remove an entry. Removing an absent key is a no-op."""
        self._check_key(key)
        with self._lock:
            self._entries.pop(key, None)

    def invalidate_prefix(self, prefix: str) -> int:
        """
        Remove every entry whose key starts with ``prefix``.

        Returns:
            Number of entries removed
        """
        self._check_key(prefix)
        with self._lock:
            doomed = [key for key in self._entries if key.startswith(prefix)]
            for key in doomed:
                del self._entries[key]
        if doomed:
            logger.debug("Invalidated cache entries", prefix=prefix, count=len(doomed))
        return len(doomed)

    def purge_expired(self) -> int:
        """
        Evict every expired entry.

        Returns:
            Number of entries evicted
        """
        with self._lock:
            now = self._clock()
            expired = [key for key, entry in self._entries.items() if self._is_expired(entry, now)]
            for key in expired:
                del self._entries[key]
            self._evictions += len(expired)
        return len(expired)

    def clear(self) -> None:
        """Clear all cached data."""
        with self._lock:
            size = len(self._entries)
            self._entries.clear()
        logger.debug("Cleared cache", entries=size)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def get_stats(self) -> Dict[str, int]:
        """
        Get cache statistics.

        Returns:
            Dictionary with cache statistics
        """
        with self._lock:
            return {
                "entries": len(self._entries),
                "hits": self._hits,
                "misses": self._misses,
                "evictions": self._evictions,
            }
