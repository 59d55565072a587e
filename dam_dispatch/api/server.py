"""FastAPI server factory and application setup."""
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from dam_dispatch._version import __version__
from dam_dispatch.api.middleware import LoggingMiddleware
from dam_dispatch.api.responses import envelope_to_response
from dam_dispatch.api.routers import invoices_router, presence_router
from dam_dispatch.config.schemas import ServerConfig
from dam_dispatch.infrastructure.dispatch import Dispatcher
from dam_dispatch.infrastructure.error import ExceptionContext, ExceptionHandler
from dam_dispatch.infrastructure.logging.logger import get_logger


def create_fastapi_app(
    dispatcher: Dispatcher,
    server_config: Optional[ServerConfig] = None,
    exception_handler: Optional[ExceptionHandler] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        dispatcher: Dispatcher every route sends its messages through
        server_config: Server configuration; defaults when None
        exception_handler: Handler for errors raised outside the dispatcher

    Returns:
        Configured FastAPI application
    """
    app = FastAPI(
        title="DAM Dispatch API",
        description="Invoices and device presence served through the dispatch pipeline",
        version=__version__,
    )
    server_config = server_config or ServerConfig()
    app.state.dispatcher = dispatcher

    logger = get_logger(__name__)
    exception_handler = exception_handler or dispatcher.exception_handler

    if server_config.cors.enabled:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=server_config.cors.origins,
            allow_methods=server_config.cors.methods,
            allow_headers=server_config.cors.headers,
        )
        logger.info("CORS middleware enabled")

    app.add_middleware(LoggingMiddleware)

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """Last-resort handler for errors raised outside the dispatcher."""
        context = ExceptionContext(
            operation=f"{request.method} {request.url.path}",
            layer="api",
            correlation_id=getattr(request.state, "request_id", None),
        )
        return envelope_to_response(exception_handler.handle(exc, context))

    @app.get("/health", tags=["System"])
    async def health_check():
        """Health check endpoint."""
        return {"status": "healthy", "service": "dam-dispatch", "version": __version__}

    app.include_router(invoices_router)
    app.include_router(presence_router)

    logger.info("FastAPI application created", routes=len(app.routes))
    return app
