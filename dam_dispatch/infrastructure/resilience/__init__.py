"""Infrastructure resilience package - retry with exponential backoff."""

from .retry_policy import RetryEvent, RetryPolicy, log_retry
from .strategy import ExponentialBackoffStrategy

__all__: list[str] = [
    "RetryPolicy",
    "RetryEvent",
    "log_retry",
    "ExponentialBackoffStrategy",
]
