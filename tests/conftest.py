"""Shared fixtures: simulated clock, recording sleep and stub messages/handlers."""
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from typing import Any, Callable, List, Optional

import pytest

from dam_dispatch.application.cancellation import CancellationToken
from dam_dispatch.application.decorators import command_handler, query_handler
from dam_dispatch.application.dto.base import BaseCommand, BaseQuery
from dam_dispatch.application.interfaces.command_query import CommandHandler, QueryHandler
from dam_dispatch.application.validation import ValidatorRegistry, not_empty
from dam_dispatch.domain.invoice import Invoice
from dam_dispatch.infrastructure.caching import MemoryCacheStore
from dam_dispatch.infrastructure.dispatch import Dispatcher, HandlerRegistry
from dam_dispatch.infrastructure.error import ExceptionHandler
from dam_dispatch.infrastructure.resilience import RetryPolicy


class FakeClock:
    """Monotonic clock driven by the test."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class RecordingSleep:
    """Sleep coroutine that records delays and advances a fake clock instantly."""

    def __init__(self, clock: Optional[FakeClock] = None):
        self.clock = clock
        self.delays: List[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)
        if self.clock is not None:
            self.clock.advance(delay)


class LookupQuery(BaseQuery):
    """Cacheable stub query. Result: ``str``."""
    cacheable = True

    name: str


class UncachedQuery(BaseQuery):
    """Stub query that never opts into caching."""

    name: str


class RenameCommand(BaseCommand):
    """Stub command. Result: ``str``."""

    name: str


@query_handler(LookupQuery)
class LookupHandler(QueryHandler[LookupQuery, Optional[str]]):
    """Counts calls; fails the first ``failures`` calls; may return None."""

    def __init__(
        self,
        failures: int = 0,
        error_factory: Callable[[], Exception] = lambda: RuntimeError("db connection lost"),
        result: Any = "__name__",
    ):
        self.calls = 0
        self.failures = failures
        self.error_factory = error_factory
        self.result = result

    async def handle(self, message: LookupQuery, cancellation: CancellationToken) -> Optional[str]:
        self.calls += 1
        if self.calls <= self.failures:
            raise self.error_factory()
        if self.result == "__name__":
            return f"value-of-{message.name}"
        return self.result


@query_handler(UncachedQuery)
class UncachedHandler(QueryHandler[UncachedQuery, str]):
    def __init__(self) -> None:
        self.calls = 0

    async def handle(self, message: UncachedQuery, cancellation: CancellationToken) -> str:
        self.calls += 1
        return message.name


@command_handler(RenameCommand)
class RenameHandler(CommandHandler[RenameCommand, str]):
    def __init__(self) -> None:
        self.calls = 0

    async def handle(self, message: RenameCommand, cancellation: CancellationToken) -> str:
        self.calls += 1
        return message.name.upper()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def sleep(clock) -> RecordingSleep:
    return RecordingSleep(clock)


@pytest.fixture
def cache(clock) -> MemoryCacheStore:
    return MemoryCacheStore(default_ttl=timedelta(minutes=10), clock=clock)


@pytest.fixture
def retry_policy(sleep, clock) -> RetryPolicy:
    return RetryPolicy(sleep=sleep, clock=clock)


@pytest.fixture
def validators() -> ValidatorRegistry:
    registry = ValidatorRegistry()
    registry.register(LookupQuery, not_empty("name", "El nombre es obligatorio."))
    registry.register(RenameCommand, not_empty("name", "El nombre es obligatorio."))
    return registry


@pytest.fixture
def build_dispatcher(validators, cache, retry_policy):
    """Factory building a dispatcher around the given handler instances."""

    def _build(*handlers, expose_details: bool = False, cache_enabled: bool = True) -> Dispatcher:
        registry = HandlerRegistry()
        registry.register_all(handlers)
        registry.freeze()
        return Dispatcher(
            handlers=registry,
            validators=validators,
            cache=cache,
            retry_policy=retry_policy,
            exception_handler=ExceptionHandler(expose_details),
            cache_enabled=cache_enabled,
        )

    return _build


def make_invoice(day: int, amount: str, serial: str = "SN-001") -> Invoice:
    return Invoice(
        serial_number=serial,
        timestamp=datetime(2024, 3, day, 12, 0, tzinfo=timezone.utc),
        total_amount=Decimal(amount),
        description=f"Factura del día {day}",
        device_activity_id=day,
    )
