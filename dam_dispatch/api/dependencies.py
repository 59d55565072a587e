"""FastAPI dependency injection integration."""
import asyncio
from typing import AsyncIterator

from fastapi import Request

from dam_dispatch.application.cancellation import CancellationToken
from dam_dispatch.infrastructure.dispatch import Dispatcher
from dam_dispatch.infrastructure.logging.logger import get_logger

DISCONNECT_POLL_SECONDS = 0.25

logger = get_logger(__name__)


def get_dispatcher(request: Request) -> Dispatcher:
    """Get the dispatcher the application was created with."""
    return request.app.state.dispatcher


async def watch_disconnect(
    request: Request,
    token: CancellationToken,
    interval: float = DISCONNECT_POLL_SECONDS,
) -> None:
    """Cancel ``token`` once the client has gone away."""
    while not token.is_cancelled:
        if await request.is_disconnected():
            logger.info("Client disconnected, cancelling request", path=request.url.path)
            token.cancel()
            return
        await asyncio.sleep(interval)


async def get_cancellation(request: Request) -> AsyncIterator[CancellationToken]:
    """
    One cancellation token per request.

    A background task watches the connection while the route runs and
    cancels the token when the client disconnects, so the dispatcher stops
    at its next check or retry delay.
    """
    token = CancellationToken()
    watcher = asyncio.ensure_future(watch_disconnect(request, token))
    try:
        yield token
    finally:
        watcher.cancel()
        await asyncio.gather(watcher, return_exceptions=True)
