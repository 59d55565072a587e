"""Retry strategies."""
from typing import Tuple, Type

from dam_dispatch.config.schemas.retry_schema import RetryConfig


class ExponentialBackoffStrategy:
    """
    Pure exponential backoff without jitter.

    The delay before retry ``n`` (1-based) is ``base_delay * multiplier ** n``
    capped at ``max_delay``; with the defaults that is 2s, 4s, 8s.
    """

    def __init__(
        self,
        max_retries: int = 3,
        base_delay: float = 1.0,
        multiplier: float = 2.0,
        max_delay: float = 60.0,
        retry_on: Tuple[Type[BaseException], ...] = (Exception,),
    ):
        if max_retries < 0:
            raise ValueError("max_retries cannot be negative")
        self.max_retries = max_retries
        self.base_delay = base_delay
        self.multiplier = multiplier
        self.max_delay = max_delay
        self.retry_on = retry_on

    @classmethod
    def from_config(
        cls,
        config: RetryConfig,
        retry_on: Tuple[Type[BaseException], ...] = (Exception,),
    ) -> "ExponentialBackoffStrategy":
        return cls(
            max_retries=config.max_retries,
            base_delay=config.base_delay,
            multiplier=config.multiplier,
            max_delay=config.max_delay,
            retry_on=retry_on,
        )

    def should_retry(self, error: BaseException, retries_so_far: int) -> bool:
        """Every matching error is retried until the retry budget is spent."""
        return retries_so_far < self.max_retries and isinstance(error, self.retry_on)

    def get_delay(self, retry_number: int) -> float:
        """Delay in seconds before the given 1-based retry."""
        return min(self.base_delay * (self.multiplier ** retry_number), self.max_delay)
