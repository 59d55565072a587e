"""Maps terminal exceptions to failure envelopes without leaking internals."""
from typing import Optional

from dam_dispatch.application.dto.responses import ApiResponse, ErrorCode
from dam_dispatch.domain.base.exceptions import ConfigurationError, DomainException
from dam_dispatch.infrastructure.logging.logger import get_logger

from .context import ExceptionContext

GENERIC_ERROR_MESSAGE = "An unexpected error occurred while processing the request."
FAILURE_MESSAGE = "Request processing failed"
CONFIGURATION_FAILURE_MESSAGE = "Request could not be routed"


class ExceptionHandler:
    """
    Converts exceptions into sanitized failure envelopes.

    Full details, including the traceback, go to the log together with the
    correlation id. Callers receive a single error line: domain exception
    messages verbatim, anything else as a generic message plus the
    correlation reference, unless ``expose_details`` is enabled.
    """

    def __init__(self, expose_details: bool = False):
        self.expose_details = expose_details
        self.logger = get_logger(__name__)

    def handle(self, error: BaseException, context: ExceptionContext) -> ApiResponse:
        """Log an exception and build the matching failure envelope."""
        self.logger.error(
            "Terminal failure",
            error_type=type(error).__name__,
            error=str(error),
            exc_info=error,
            **context.to_dict(),
        )

        if isinstance(error, ConfigurationError):
            error_code = ErrorCode.CONFIGURATION_ERROR
            message = CONFIGURATION_FAILURE_MESSAGE
        else:
            error_code = ErrorCode.EXECUTION_ERROR
            message = FAILURE_MESSAGE

        return ApiResponse.failure(
            [self.describe(error, context.correlation_id)],
            message=message,
            error_code=error_code,
            reference=context.correlation_id,
        )

    def describe(self, error: BaseException, reference: Optional[str]) -> str:
        """Caller-facing description of an exception."""
        if self.expose_details:
            return f"{type(error).__name__}: {error}"
        if isinstance(error, DomainException) and str(error):
            return str(error)
        if reference:
            return f"{GENERIC_ERROR_MESSAGE} Reference: {reference}"
        return GENERIC_ERROR_MESSAGE
