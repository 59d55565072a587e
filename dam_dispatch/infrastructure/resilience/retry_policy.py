"""Retry policy wrapping asynchronous operations."""
import asyncio
import time
from dataclasses import dataclass
from typing import Awaitable, Callable, Optional, TypeVar

from dam_dispatch.application.cancellation import CancellationToken
from dam_dispatch.domain.base.exceptions import OperationCanceledError
from dam_dispatch.infrastructure.logging.logger import get_logger

from .strategy import ExponentialBackoffStrategy

T = TypeVar("T")

logger = get_logger(__name__)


@dataclass(frozen=True)
class RetryEvent:
    """Observation emitted before each retry delay."""
    attempt: int
    delay: float
    error: BaseException
    elapsed: float


RetryCallback = Callable[[RetryEvent], None]
Sleep = Callable[[float], Awaitable[None]]


def log_retry(event: RetryEvent) -> None:
    """Default retry observer: one structured warning per retry."""
    logger.warning(
        "Operation failed, retrying",
        attempt=event.attempt,
        delay_seconds=event.delay,
        error_type=type(event.error).__name__,
        error=str(event.error),
    )


class RetryPolicy:
    """
    Runs a fallible async operation with bounded exponential backoff.

    Attempt state lives in the ``execute`` call only. When retries are
    exhausted the last error propagates unchanged. Cancellation is never
    retried: the token is checked before every attempt and interrupts any
    pending delay.
    """

    def __init__(
        self,
        strategy: Optional[ExponentialBackoffStrategy] = None,
        on_retry: Optional[RetryCallback] = log_retry,
        sleep: Sleep = asyncio.sleep,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.strategy = strategy or ExponentialBackoffStrategy()
        self._on_retry = on_retry
        self._sleep = sleep
        self._clock = clock

    async def execute(
        self,
        operation: Callable[[], Awaitable[T]],
        cancellation: Optional[CancellationToken] = None,
    ) -> T:
        """
        Execute an operation, retrying on failure.

        Args:
            operation: Zero-argument callable returning an awaitable
            cancellation: Optional token that aborts the retry loop

        Returns:
            The operation result

        Raises:
            OperationCanceledError: If the token was cancelled
            Exception: The last error once retries are exhausted
        """
        started = self._clock()
        retries = 0
        while True:
            if cancellation is not None:
                cancellation.raise_if_cancelled()
            try:
                return await operation()
            except OperationCanceledError:
                raise
            except Exception as error:
                if not self.strategy.should_retry(error, retries):
                    raise
                retries += 1
                delay = self.strategy.get_delay(retries)
                self._notify(RetryEvent(retries, delay, error, self._clock() - started))
                await self._wait(delay, cancellation)

    def _notify(self, event: RetryEvent) -> None:
        if self._on_retry is None:
            return
        try:
            self._on_retry(event)
        except Exception:
            logger.warning("Retry observer failed", attempt=event.attempt, exc_info=True)

    async def _wait(self, delay: float, cancellation: Optional[CancellationToken]) -> None:
        if cancellation is None:
            await self._sleep(delay)
            return

        sleeper = asyncio.ensure_future(self._sleep(delay))
        watcher = asyncio.ensure_future(cancellation.wait())
        try:
            await asyncio.wait({sleeper, watcher}, return_when=asyncio.FIRST_COMPLETED)
        finally:
            for task in (sleeper, watcher):
                task.cancel()
            await asyncio.gather(sleeper, watcher, return_exceptions=True)
        cancellation.raise_if_cancelled()
        sleeper.result()
