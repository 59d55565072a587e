"""Logging middleware for FastAPI."""

import time
import uuid

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from dam_dispatch.infrastructure.logging.logger import get_logger


class LoggingMiddleware(BaseHTTPMiddleware):
    """Logs every request and its response, and tags both with a request id."""

    def __init__(self, app, log_requests: bool = True, log_responses: bool = True):
        super().__init__(app)
        self.log_requests = log_requests
        self.log_responses = log_responses
        self.logger = get_logger(__name__)

    async def dispatch(self, request: Request, call_next):
        request_id = str(uuid.uuid4())
        request.state.request_id = request_id

        start_time = time.time()
        if self.log_requests:
            self._log_request(request, request_id)

        try:
            response = await call_next(request)
        except Exception as e:
            self.logger.error(
                "Request failed",
                request_id=request_id,
                method=request.method,
                path=request.url.path,
                error_type=type(e).__name__,
                duration_ms=round((time.time() - start_time) * 1000, 3),
            )
            raise

        if self.log_responses:
            self._log_response(request, response, request_id, time.time() - start_time)
        response.headers["X-Request-ID"] = request_id
        return response

    def _log_request(self, request: Request, request_id: str) -> None:
        self.logger.info(
            "Request received",
            request_id=request_id,
            method=request.method,
            path=request.url.path,
            client=request.client.host if request.client else "unknown",
        )
        if request.query_params:
            self.logger.debug(
                "Request query params",
                request_id=request_id,
                params=dict(request.query_params),
            )

    def _log_response(
        self, request: Request, response: Response, request_id: str, duration: float
    ) -> None:
        self.logger.info(
            "Response sent",
            request_id=request_id,
            method=request.method,
            path=request.url.path,
            status_code=response.status_code,
            duration_ms=round(duration * 1000, 3),
        )
