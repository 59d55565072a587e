"""Tests for the handler registry."""
import pytest

from dam_dispatch.application.cancellation import CancellationToken
from dam_dispatch.application.interfaces.command_query import QueryHandler
from dam_dispatch.domain.base.exceptions import ConfigurationError, HandlerNotFoundError
from dam_dispatch.infrastructure.dispatch import HandlerRegistry

from conftest import (
    LookupHandler,
    LookupQuery,
    RenameCommand,
    RenameHandler,
    UncachedHandler,
    UncachedQuery,
)


class UndecoratedHandler(QueryHandler[LookupQuery, str]):
    async def handle(self, message: LookupQuery, cancellation: CancellationToken) -> str:
        return message.name


class TestHandlerRegistry:
    """Registration, lookup and startup verification."""

    def test_resolve_registered_handler(self):
        registry = HandlerRegistry()
        handler = LookupHandler()
        registry.register(handler)
        assert registry.resolve(LookupQuery(name="a")) is handler

    def test_resolve_unknown_message(self):
        registry = HandlerRegistry()
        with pytest.raises(HandlerNotFoundError) as exc_info:
            registry.resolve(LookupQuery(name="a"))
        assert exc_info.value.message_type == "LookupQuery"

    def test_duplicate_registration_is_rejected(self):
        registry = HandlerRegistry()
        registry.register(LookupHandler())
        with pytest.raises(ConfigurationError):
            registry.register(LookupHandler())

    def test_undecorated_handler_needs_explicit_type(self):
        registry = HandlerRegistry()
        with pytest.raises(ConfigurationError):
            registry.register(UndecoratedHandler())
        registry.register(UndecoratedHandler(), LookupQuery)
        assert registry.has_handler(LookupQuery)

    def test_command_handler_cannot_answer_query(self):
        registry = HandlerRegistry()
        with pytest.raises(ConfigurationError):
            registry.register(RenameHandler(), LookupQuery)

    def test_frozen_registry_rejects_registration(self):
        registry = HandlerRegistry()
        registry.freeze()
        assert registry.is_frozen
        with pytest.raises(ConfigurationError):
            registry.register(LookupHandler())

    def test_verify_lists_every_missing_handler(self):
        registry = HandlerRegistry()
        registry.register(LookupHandler())
        with pytest.raises(ConfigurationError) as exc_info:
            registry.verify([LookupQuery, RenameCommand, UncachedQuery])
        assert exc_info.value.missing_fields == ["RenameCommand", "UncachedQuery"]

    def test_verify_passes_when_complete(self):
        registry = HandlerRegistry()
        registry.register_all([LookupHandler(), RenameHandler(), UncachedHandler()])
        registry.verify([LookupQuery, RenameCommand, UncachedQuery])
        assert registry.get_stats() == {
            "command_handlers": 1,
            "query_handlers": 2,
            "total_handlers": 3,
            "frozen": False,
        }
