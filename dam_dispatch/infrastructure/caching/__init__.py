"""Caching infrastructure."""

from .memory_cache import DEFAULT_TTL, CacheEntry, MemoryCacheStore

__all__: list[str] = ["MemoryCacheStore", "CacheEntry", "DEFAULT_TTL"]
