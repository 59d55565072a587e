"""Explicit message-type to handler mapping, built once at startup."""
import threading
from typing import Any, Dict, Iterable, List, Optional, Type

from dam_dispatch.application.decorators import get_handled_message_type
from dam_dispatch.application.dto.base import BaseCommand, BaseMessage, BaseQuery
from dam_dispatch.application.interfaces.command_query import (
    CommandHandler,
    MessageHandler,
    QueryHandler,
)
from dam_dispatch.domain.base.exceptions import ConfigurationError, HandlerNotFoundError
from dam_dispatch.infrastructure.logging.logger import get_logger

logger = get_logger(__name__)


class HandlerRegistry:
    """
    Maps message type tags to handler instances.

    Exactly one handler may be registered per message type. Registration
    happens at startup; after ``freeze`` the table is read-only, so lookups
    take no lock.
    """

    def __init__(self) -> None:
        self._handlers: Dict[str, MessageHandler] = {}
        self._message_types: Dict[str, Type[BaseMessage]] = {}
        self._lock = threading.RLock()
        self._frozen = False

    def register(
        self,
        handler: MessageHandler,
        message_type: Optional[Type[BaseMessage]] = None,
    ) -> None:
        """
        Register a handler instance.

        Args:
            handler: Handler instance
            message_type: Message type it answers; read from the
                ``@command_handler``/``@query_handler`` decorator when omitted

        Raises:
            ConfigurationError: On a missing or mismatched message type, a
                duplicate registration, or a frozen registry
        """
        message_type = message_type or get_handled_message_type(handler)
        if message_type is None:
            raise ConfigurationError(
                f"{type(handler).__name__} does not declare the message type it handles"
            )
        if not isinstance(handler, MessageHandler):
            raise ConfigurationError(f"{type(handler).__name__} is not a message handler")
        if issubclass(message_type, BaseQuery) and isinstance(handler, CommandHandler):
            raise ConfigurationError(
                f"Query {message_type.__name__} cannot be handled by command handler "
                f"{type(handler).__name__}"
            )
        if issubclass(message_type, BaseCommand) and isinstance(handler, QueryHandler):
            raise ConfigurationError(
                f"Command {message_type.__name__} cannot be handled by query handler "
                f"{type(handler).__name__}"
            )

        key = message_type.message_type_name()
        with self._lock:
            if self._frozen:
                raise ConfigurationError(
                    f"Cannot register handler for {key}: registry is frozen"
                )
            if key in self._handlers:
                raise ConfigurationError(
                    f"Duplicate handler for {key}: {type(self._handlers[key]).__name__} "
                    f"is already registered"
                )
            self._handlers[key] = handler
            self._message_types[key] = message_type
        logger.debug("Registered handler", message_type=key, handler=type(handler).__name__)

    def register_all(self, handlers: Iterable[MessageHandler]) -> None:
        """Register decorated handler instances."""
        for handler in handlers:
            self.register(handler)

    def freeze(self) -> None:
        """Reject further registrations."""
        with self._lock:
            self._frozen = True

    @property
    def is_frozen(self) -> bool:
        return self._frozen

    def resolve(self, message: BaseMessage) -> MessageHandler:
        """
        Find the handler for a message.

        Raises:
            HandlerNotFoundError: If no handler is registered for its type
        """
        key = type(message).message_type_name()
        handler = self._handlers.get(key)
        if handler is None:
            raise HandlerNotFoundError(key)
        return handler

    def has_handler(self, message_type: Type[BaseMessage]) -> bool:
        return message_type.message_type_name() in self._handlers

    def verify(self, message_types: Iterable[Type[BaseMessage]]) -> None:
        """
        Startup self-check: every known message type has a handler.

        Raises:
            ConfigurationError: Listing every message type without a handler
        """
        missing: List[str] = sorted(
            {t.message_type_name() for t in message_types if not self.has_handler(t)}
        )
        if missing:
            raise ConfigurationError(
                f"No handler registered for: {', '.join(missing)}",
                missing_fields=missing,
            )
        logger.info("Handler registrations verified", handlers=len(self._handlers))

    def registered_types(self) -> List[Type[BaseMessage]]:
        return list(self._message_types.values())

    def get_stats(self) -> Dict[str, Any]:
        """Get registry statistics."""
        commands = sum(1 for t in self._message_types.values() if issubclass(t, BaseCommand))
        queries = sum(1 for t in self._message_types.values() if issubclass(t, BaseQuery))
        return {
            "command_handlers": commands,
            "query_handlers": queries,
            "total_handlers": len(self._handlers),
            "frozen": self._frozen,
        }
