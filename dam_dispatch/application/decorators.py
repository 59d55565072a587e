"""
Application Layer Decorators for CQRS.

The decorators only attach metadata to a handler class. Nothing is
registered globally: the composition root hands handler instances to a
``HandlerRegistry``, which reads the metadata to learn the message type.
"""
from __future__ import annotations

from typing import Callable, Optional, Type, TypeVar

from dam_dispatch.application.dto.base import BaseCommand, BaseMessage, BaseQuery
from dam_dispatch.application.interfaces.command_query import (
    CommandHandler,
    MessageHandler,
    QueryHandler,
)

TQueryHandler = TypeVar("TQueryHandler", bound=QueryHandler)
TCommandHandler = TypeVar("TCommandHandler", bound=CommandHandler)


def query_handler(query_type: Type[BaseQuery]) -> Callable[[Type[TQueryHandler]], Type[TQueryHandler]]:
    """
    Mark a class as the handler of a query type.

    Usage:
        @query_handler(GetInvoicesQuery)
        class GetInvoicesHandler(QueryHandler[GetInvoicesQuery, PaginatedResult[InvoiceDTO]]):
            ...
    """
    if not (isinstance(query_type, type) and issubclass(query_type, BaseQuery)):
        raise TypeError(f"{query_type!r} is not a query type")

    def decorator(handler_class: Type[TQueryHandler]) -> Type[TQueryHandler]:
        handler_class._message_type = query_type
        handler_class._is_query_handler = True
        return handler_class

    return decorator


def command_handler(command_type: Type[BaseCommand]) -> Callable[[Type[TCommandHandler]], Type[TCommandHandler]]:
    """
    Mark a class as the handler of a command type.

    Usage:
        @command_handler(CreateDevicePresenceCommand)
        class CreateDevicePresenceHandler(CommandHandler[CreateDevicePresenceCommand, int]):
            ...
    """
    if not (isinstance(command_type, type) and issubclass(command_type, BaseCommand)):
        raise TypeError(f"{command_type!r} is not a command type")

    def decorator(handler_class: Type[TCommandHandler]) -> Type[TCommandHandler]:
        handler_class._message_type = command_type
        handler_class._is_command_handler = True
        return handler_class

    return decorator


def get_handled_message_type(handler: MessageHandler) -> Optional[Type[BaseMessage]]:
    """Message type declared on a handler class, if it was decorated."""
    return getattr(type(handler), "_message_type", None)
