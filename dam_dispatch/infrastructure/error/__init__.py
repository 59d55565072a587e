"""Error handling infrastructure package."""

from .context import ExceptionContext
from .exception_handler import GENERIC_ERROR_MESSAGE, ExceptionHandler

__all__: list[str] = [
    "ExceptionContext",
    "ExceptionHandler",
    "GENERIC_ERROR_MESSAGE",
]
