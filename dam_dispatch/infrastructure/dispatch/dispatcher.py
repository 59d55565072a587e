"""Dispatcher - the single entry point into the business layer."""
from functools import partial
from typing import Any, Dict, Iterable, List, Optional, Type

from dam_dispatch.application.cancellation import CancellationToken
from dam_dispatch.application.dto.base import BaseCommand, BaseMessage, BaseQuery
from dam_dispatch.application.dto.responses import ApiResponse
from dam_dispatch.application.validation import ValidatorRegistry
from dam_dispatch.domain.base.exceptions import HandlerNotFoundError, OperationCanceledError
from dam_dispatch.application.interfaces.cache_port import CachePort
from dam_dispatch.infrastructure.error import ExceptionContext, ExceptionHandler
from dam_dispatch.infrastructure.logging.logger import get_logger
from dam_dispatch.infrastructure.resilience import RetryPolicy

from .handler_registry import HandlerRegistry
from .pipeline import (
    CachingBehavior,
    DispatchContext,
    LoggingBehavior,
    PipelineBehavior,
    RetryBehavior,
    ValidationBehavior,
    new_correlation_id,
)

logger = get_logger(__name__)


class Dispatcher:
    """
    Routes commands and queries to their handlers through the pipeline.

    Every call returns an ``ApiResponse``; no exception raised by a handler
    or a behavior escapes ``dispatch``. Native ``asyncio.CancelledError`` is
    the exception: it propagates so task cancellation keeps working.
    """

    def __init__(
        self,
        handlers: HandlerRegistry,
        validators: Optional[ValidatorRegistry] = None,
        cache: Optional[CachePort] = None,
        retry_policy: Optional[RetryPolicy] = None,
        exception_handler: Optional[ExceptionHandler] = None,
        cache_enabled: bool = True,
    ):
        self.handlers = handlers
        self.validators = validators or ValidatorRegistry()
        self.cache = cache
        self.retry_policy = retry_policy or RetryPolicy()
        self.exception_handler = exception_handler or ExceptionHandler()

        self.behaviors: List[PipelineBehavior] = [
            LoggingBehavior(),
            ValidationBehavior(self.validators),
        ]
        if cache is not None:
            self.behaviors.append(CachingBehavior(cache, enabled=cache_enabled))
        self.behaviors.append(RetryBehavior(self.retry_policy, self.exception_handler))

    async def dispatch(
        self,
        message: BaseMessage,
        cancellation: Optional[CancellationToken] = None,
    ) -> ApiResponse:
        """
        Dispatch a message through the pipeline.

        Args:
            message: Command or query to execute
            cancellation: Optional token signalled when the caller gives up

        Returns:
            Success envelope with the handler result, or a failure envelope
            carrying the validation reasons, a sanitized error, or CANCELED
        """
        cancellation = cancellation or CancellationToken.none()
        try:
            handler = self.handlers.resolve(message)
        except HandlerNotFoundError as e:
            return self.exception_handler.handle(
                e,
                ExceptionContext(
                    operation="resolve_handler",
                    layer="dispatch",
                    correlation_id=new_correlation_id(),
                    message_type=type(message).message_type_name(),
                ),
            )

        context = DispatchContext(message=message, handler=handler, cancellation=cancellation)
        if cancellation.is_cancelled:
            return ApiResponse.canceled(context.correlation_id)

        step = partial(self._invoke_handler, context)
        for behavior in reversed(self.behaviors):
            step = partial(behavior.execute, context, step)

        try:
            return await step()
        except OperationCanceledError:
            return ApiResponse.canceled(context.correlation_id)
        except Exception as e:
            return self.exception_handler.handle(e, context.exception_context("dispatch"))

    async def send(
        self, command: BaseCommand, cancellation: Optional[CancellationToken] = None
    ) -> ApiResponse:
        """Dispatch a command."""
        if not isinstance(command, BaseCommand):
            raise TypeError(f"{type(command).__name__} is not a command")
        return await self.dispatch(command, cancellation)

    async def query(
        self, query: BaseQuery, cancellation: Optional[CancellationToken] = None
    ) -> ApiResponse:
        """Dispatch a query."""
        if not isinstance(query, BaseQuery):
            raise TypeError(f"{type(query).__name__} is not a query")
        return await self.dispatch(query, cancellation)

    @staticmethod
    async def _invoke_handler(context: DispatchContext) -> ApiResponse:
        result = await context.handler.handle(context.message, context.cancellation)
        return ApiResponse.ok(result)

    def verify(self, message_types: Optional[Iterable[Type[BaseMessage]]] = None) -> None:
        """
        Check that every known message type has a handler.

        Without arguments, every message type with validation rules is
        checked.

        Raises:
            ConfigurationError: Listing the message types without a handler
        """
        if message_types is None:
            message_types = [
                t for t in self.validators.registered_types()
                if isinstance(t, type) and issubclass(t, (BaseCommand, BaseQuery))
                and t not in (BaseCommand, BaseQuery)
            ]
        self.handlers.verify(message_types)

    def get_stats(self) -> Dict[str, Any]:
        """Get dispatcher statistics."""
        stats: Dict[str, Any] = {
            "handlers": self.handlers.get_stats(),
            "validators": self.validators.get_stats(),
            "behaviors": [type(b).__name__ for b in self.behaviors],
        }
        if self.cache is not None:
            stats["cache"] = self.cache.get_stats()
        return stats
