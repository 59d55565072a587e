"""Configuration package."""

from .schemas import (
    AppConfig,
    CacheConfig,
    DispatchConfig,
    LogDestination,
    LoggingConfig,
    RetryConfig,
    ServerConfig,
)

__all__: list[str] = [
    "AppConfig",
    "CacheConfig",
    "DispatchConfig",
    "LogDestination",
    "LoggingConfig",
    "RetryConfig",
    "ServerConfig",
]
