"""Message dispatch - handler registry, pipeline behaviors and dispatcher."""

from .dispatcher import Dispatcher
from .handler_registry import HandlerRegistry
from .pipeline import (
    CachingBehavior,
    DispatchContext,
    LoggingBehavior,
    PipelineBehavior,
    RetryBehavior,
    ValidationBehavior,
)

__all__: list[str] = [
    "Dispatcher",
    "HandlerRegistry",
    "DispatchContext",
    "PipelineBehavior",
    "LoggingBehavior",
    "ValidationBehavior",
    "CachingBehavior",
    "RetryBehavior",
]
