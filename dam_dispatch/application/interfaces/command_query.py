"""
Handler interfaces for commands and queries.

Handlers hold business logic only. Validation, caching and retry belong to
the dispatch pipeline and must not be repeated inside a handler.
"""
from abc import ABC, abstractmethod
from typing import Generic, TypeVar

from dam_dispatch.application.cancellation import CancellationToken
from dam_dispatch.application.dto.base import BaseCommand, BaseMessage, BaseQuery

TMessage = TypeVar("TMessage", bound=BaseMessage)
TCommand = TypeVar("TCommand", bound=BaseCommand)
TQuery = TypeVar("TQuery", bound=BaseQuery)
TResult = TypeVar("TResult")


class MessageHandler(ABC, Generic[TMessage, TResult]):
    """Capability shared by every handler the dispatcher can route to."""

    @abstractmethod
    async def handle(self, message: TMessage, cancellation: CancellationToken) -> TResult:
        """
        Execute the business logic for one message.

        Args:
            message: The message to handle
            cancellation: Token signalled when the caller abandons the request

        Returns:
            The result declared by the message type
        """


class CommandHandler(MessageHandler[TCommand, TResult]):
    """Handler for a command; returns a simple result such as an identifier."""


class QueryHandler(MessageHandler[TQuery, TResult]):
    """Handler for a query; must be free of side effects."""
