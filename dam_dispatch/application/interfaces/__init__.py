"""Application interfaces."""

from .cache_port import CachePort
from .command_query import CommandHandler, MessageHandler, QueryHandler

__all__: list[str] = ["MessageHandler", "CommandHandler", "QueryHandler", "CachePort"]
