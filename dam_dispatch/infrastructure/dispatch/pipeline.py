"""
Dispatch pipeline behaviors.

Each behavior wraps the rest of the chain. Behaviors receive the dispatch
context and a zero-argument ``next_step`` coroutine factory, and return an
``ApiResponse``; any of them may short-circuit by returning without calling
``next_step``. The dispatcher composes them in a fixed order:

    Logging -> Validation -> Caching -> Retry -> handler
"""
import copy
import time
import uuid
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Awaitable, Callable, Optional

from dam_dispatch.application.cancellation import CancellationToken
from dam_dispatch.application.dto.base import BaseMessage, BaseQuery
from dam_dispatch.application.dto.responses import ApiResponse, ErrorCode
from dam_dispatch.application.interfaces.cache_port import CachePort
from dam_dispatch.application.interfaces.command_query import MessageHandler
from dam_dispatch.application.validation import ValidatorRegistry
from dam_dispatch.domain.base.exceptions import OperationCanceledError
from dam_dispatch.infrastructure.error import ExceptionContext, ExceptionHandler
from dam_dispatch.infrastructure.logging.logger import get_logger
from dam_dispatch.infrastructure.resilience import RetryPolicy

VALIDATION_FAILURE_MESSAGE = "Validation failed"

NextStep = Callable[[], Awaitable[ApiResponse]]


def new_correlation_id() -> str:
    return uuid.uuid4().hex


@dataclass
class DispatchContext:
    """State of one dispatch call, shared by every behavior in its chain."""
    message: BaseMessage
    handler: MessageHandler
    cancellation: CancellationToken = field(default_factory=CancellationToken.none)
    correlation_id: str = field(default_factory=new_correlation_id)
    started_at: float = field(default_factory=time.monotonic)
    cache_hit: bool = False

    @property
    def message_type(self) -> str:
        return type(self.message).message_type_name()

    def elapsed_ms(self) -> float:
        return round((time.monotonic() - self.started_at) * 1000, 3)

    def exception_context(self, operation: str) -> ExceptionContext:
        return ExceptionContext(
            operation=operation,
            layer="dispatch",
            correlation_id=self.correlation_id,
            message_type=self.message_type,
            handler=type(self.handler).__name__,
        )


class PipelineBehavior(ABC):
    """Base class for pipeline behaviors."""

    @abstractmethod
    async def execute(self, context: DispatchContext, next_step: NextStep) -> ApiResponse:
        """Run this behavior around the rest of the chain."""


class LoggingBehavior(PipelineBehavior):
    """Emits one start and one outcome event per dispatch."""

    def __init__(self) -> None:
        self.logger = get_logger(__name__)

    async def execute(self, context: DispatchContext, next_step: NextStep) -> ApiResponse:
        log = self.logger.bind(
            message_type=context.message_type,
            correlation_id=context.correlation_id,
        )
        log.debug("Dispatch started", handler=type(context.handler).__name__)
        try:
            response = await next_step()
        except Exception as e:
            log.error(
                "Dispatch raised",
                error_type=type(e).__name__,
                duration_ms=context.elapsed_ms(),
            )
            raise

        if response.success:
            log.info(
                "Dispatch completed",
                outcome="success",
                cache_hit=context.cache_hit,
                duration_ms=context.elapsed_ms(),
            )
        else:
            log.warning(
                "Dispatch failed",
                outcome=response.error_code.value if response.error_code else "failure",
                errors=len(response.errors or ()),
                duration_ms=context.elapsed_ms(),
            )
        return response


class ValidationBehavior(PipelineBehavior):
    """Rejects messages that violate any registered rule."""

    def __init__(self, validators: ValidatorRegistry):
        self.validators = validators

    async def execute(self, context: DispatchContext, next_step: NextStep) -> ApiResponse:
        reasons = self.validators.evaluate(context.message)
        if reasons:
            return ApiResponse.failure(
                reasons,
                message=VALIDATION_FAILURE_MESSAGE,
                error_code=ErrorCode.VALIDATION_ERROR,
            )
        return await next_step()


class CachingBehavior(PipelineBehavior):
    """
    Serves cacheable queries from the cache store.

    Only successful, non-empty results are written back. The store holds
    its own copy of each result and every hit returns a fresh copy. Commands
    and queries that did not opt in pass straight through.
    """

    def __init__(self, cache: CachePort, enabled: bool = True):
        self.cache = cache
        self.enabled = enabled
        self.logger = get_logger(__name__)

    def applies_to(self, message: BaseMessage) -> bool:
        return self.enabled and isinstance(message, BaseQuery) and type(message).cacheable

    async def execute(self, context: DispatchContext, next_step: NextStep) -> ApiResponse:
        message = context.message
        if not self.applies_to(message):
            return await next_step()

        key = message.cache_key()
        cached = self.cache.get(key)
        if cached is not None:
            context.cache_hit = True
            return ApiResponse.ok(copy.deepcopy(cached))

        response = await next_step()
        if response.success and response.data is not None:
            self.cache.set(key, copy.deepcopy(response.data), ttl=type(message).cache_ttl)
            self.logger.debug("Cached query result", key=key, correlation_id=context.correlation_id)
        return response


class RetryBehavior(PipelineBehavior):
    """
    Runs the handler under the retry policy.

    This is where handler exceptions stop: cancellation becomes a CANCELED
    envelope and any other terminal error a sanitized failure envelope.
    """

    def __init__(self, policy: RetryPolicy, exception_handler: Optional[ExceptionHandler] = None):
        self.policy = policy
        self.exception_handler = exception_handler or ExceptionHandler()

    async def execute(self, context: DispatchContext, next_step: NextStep) -> ApiResponse:
        try:
            return await self.policy.execute(next_step, context.cancellation)
        except OperationCanceledError:
            return ApiResponse.canceled(context.correlation_id)
        except Exception as e:
            return self.exception_handler.handle(e, context.exception_context("handle"))
