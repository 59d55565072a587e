"""Configuration schemas."""

from .app_schema import AppConfig
from .cache_schema import CacheConfig
from .dispatch_schema import DispatchConfig
from .logging_schema import LogDestination, LoggingConfig
from .retry_schema import RetryConfig
from .server_schema import CORSConfig, ServerConfig

__all__: list[str] = [
    "AppConfig",
    "CacheConfig",
    "DispatchConfig",
    "LogDestination",
    "LoggingConfig",
    "RetryConfig",
    "ServerConfig",
    "CORSConfig",
]
