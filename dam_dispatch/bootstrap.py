"""Application bootstrap - composition root wiring the dispatch pipeline."""

from __future__ import annotations

import asyncio
import time
from typing import Any, Awaitable, Callable, Dict, Optional

from dam_dispatch.application import invoices, presence
from dam_dispatch.application.validation import ValidatorRegistry
from dam_dispatch.config import AppConfig
from dam_dispatch.config.manager import ConfigurationManager
from dam_dispatch.domain.invoice import InvoiceRepository
from dam_dispatch.domain.presence import DevicePresenceRepository
from dam_dispatch.infrastructure.caching import MemoryCacheStore
from dam_dispatch.infrastructure.dispatch import Dispatcher, HandlerRegistry
from dam_dispatch.infrastructure.error import ExceptionHandler
from dam_dispatch.infrastructure.logging.logger import get_logger, setup_logging
from dam_dispatch.infrastructure.persistence import (
    InMemoryDevicePresenceRepository,
    InMemoryInvoiceRepository,
)
from dam_dispatch.infrastructure.resilience import ExponentialBackoffStrategy, RetryPolicy

FEATURES = (invoices, presence)


class Application:
    """
    Builds and owns every long-lived component.

    Registries are filled and frozen during ``initialize``; the dispatcher
    is verified against every feature message type before it is exposed.
    Repositories, the sleep coroutine and the clock may be injected so tests
    can run the real wiring on a simulated clock.
    """

    def __init__(
        self,
        config_path: Optional[str] = None,
        config_manager: Optional[ConfigurationManager] = None,
        invoice_repository: Optional[InvoiceRepository] = None,
        presence_repository: Optional[DevicePresenceRepository] = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        clock: Callable[[], float] = time.monotonic,
        configure_logging: bool = True,
    ) -> None:
        self.config_manager = config_manager or ConfigurationManager(config_path)
        self.invoice_repository = invoice_repository or InMemoryInvoiceRepository()
        self.presence_repository = presence_repository or InMemoryDevicePresenceRepository()
        self._sleep = sleep
        self._clock = clock
        self._configure_logging = configure_logging
        self._initialized = False

        self.cache: Optional[MemoryCacheStore] = None
        self.handlers: Optional[HandlerRegistry] = None
        self.validators: Optional[ValidatorRegistry] = None
        self._dispatcher: Optional[Dispatcher] = None

        self.logger = get_logger(__name__)

    @property
    def config(self) -> AppConfig:
        return self.config_manager.app_config

    @property
    def dispatcher(self) -> Dispatcher:
        if self._dispatcher is None:
            raise RuntimeError("Application is not initialized")
        return self._dispatcher

    def initialize(self) -> "Application":
        """Wire every component. Calling it again is a no-op."""
        if self._initialized:
            return self

        config = self.config
        if self._configure_logging:
            setup_logging(config.logging)
        self.logger.info(
            "Initializing application",
            environment=config.environment,
            cache_enabled=config.cache.enabled,
            max_retries=config.retry.max_retries,
        )

        self.cache = MemoryCacheStore(
            default_ttl=config.cache.default_ttl,
            sliding_expiration=config.cache.sliding_expiration,
            clock=self._clock,
        )
        retry_policy = RetryPolicy(
            ExponentialBackoffStrategy.from_config(config.retry),
            sleep=self._sleep,
            clock=self._clock,
        )

        self.validators = ValidatorRegistry()
        for feature in FEATURES:
            feature.register_validators(self.validators)
        self.validators.freeze()

        self.handlers = HandlerRegistry()
        self.handlers.register_all(
            [
                invoices.GetInvoicesHandler(self.invoice_repository),
                invoices.GetInvoiceByIdHandler(self.invoice_repository),
                presence.CreateDevicePresenceHandler(self.presence_repository, self.cache),
                presence.GetPresencesHandler(self.presence_repository),
                presence.GetPresenceByIdHandler(self.presence_repository),
            ]
        )
        self.handlers.freeze()

        self._dispatcher = Dispatcher(
            handlers=self.handlers,
            validators=self.validators,
            cache=self.cache,
            retry_policy=retry_policy,
            exception_handler=ExceptionHandler(config.dispatch.expose_error_details),
            cache_enabled=config.cache.enabled,
        )
        if config.dispatch.verify_on_startup:
            self._dispatcher.verify(
                [message for feature in FEATURES for message in feature.MESSAGES]
            )

        self._initialized = True
        self.logger.info("Application initialized", **self._dispatcher.get_stats()["handlers"])
        return self

    def create_app(self):
        """Build the FastAPI application around the dispatcher."""
        from dam_dispatch.api.server import create_fastapi_app

        self.initialize()
        return create_fastapi_app(self.dispatcher, self.config.server)

    def health_check(self) -> Dict[str, Any]:
        """Component status for diagnostics."""
        if not self._initialized:
            return {"status": "not_initialized"}
        return {
            "status": "healthy",
            "environment": self.config.environment,
            **self.dispatcher.get_stats(),
        }

    def shutdown(self) -> None:
        """Drop cached results and mark the application stopped."""
        self.logger.info("Shutting down application")
        if self.cache is not None:
            self.cache.clear()
        self._initialized = False

    def __enter__(self) -> "Application":
        return self.initialize()

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.shutdown()


def create_application(config_path: Optional[str] = None) -> Application:
    """Create and initialize an application."""
    return Application(config_path).initialize()


def main() -> None:
    """Serve the HTTP API with uvicorn."""
    import uvicorn

    app = create_application()
    server_config = app.config.server
    uvicorn.run(
        app.create_app(),
        host=server_config.host,
        port=server_config.port,
        log_level=server_config.log_level,
        access_log=server_config.access_log,
    )


if __name__ == "__main__":
    main()
