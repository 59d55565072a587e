"""Cooperative cancellation for dispatch calls."""
import asyncio
from typing import Optional

from dam_dispatch.domain.base.exceptions import OperationCanceledError


class CancellationToken:
    """
    Signal raised by a caller that abandons a request.

    The dispatcher checks the token before invoking a handler and before each
    retry attempt, and races it against every retry delay.
    """

    def __init__(self) -> None:
        self._cancelled = False
        self._event: Optional[asyncio.Event] = None

    @classmethod
    def none(cls) -> "CancellationToken":
        """A token nobody will ever cancel."""
        return cls()

    @property
    def is_cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        """Request cancellation. Safe to call more than once."""
        self._cancelled = True
        if self._event is not None:
            self._event.set()

    def raise_if_cancelled(self) -> None:
        """Raise OperationCanceledError when cancellation was requested."""
        if self._cancelled:
            raise OperationCanceledError()

    async def wait(self) -> None:
        """Suspend until cancellation is requested."""
        if self._event is None:
            self._event = asyncio.Event()
            if self._cancelled:
                self._event.set()
        await self._event.wait()
