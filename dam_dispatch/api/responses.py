"""Envelope to HTTP response mapping."""
from typing import Dict

from fastapi.responses import JSONResponse

from dam_dispatch.application.dto.responses import ApiResponse, ErrorCode

STATUS_CLIENT_CLOSED_REQUEST = 499

ERROR_STATUS: Dict[ErrorCode, int] = {
    ErrorCode.VALIDATION_ERROR: 400,
    ErrorCode.NOT_FOUND: 404,
    ErrorCode.CANCELED: STATUS_CLIENT_CLOSED_REQUEST,
    ErrorCode.CONFIGURATION_ERROR: 500,
    ErrorCode.EXECUTION_ERROR: 500,
}


def status_for(response: ApiResponse, success_status: int = 200) -> int:
    """HTTP status code matching an envelope."""
    if response.success:
        return success_status
    return ERROR_STATUS.get(response.error_code, 500)


def envelope_to_response(response: ApiResponse, success_status: int = 200) -> JSONResponse:
    """Serialize an envelope with its matching status code."""
    return JSONResponse(
        status_code=status_for(response, success_status),
        content=response.to_dict(),
    )


def not_found(message: str) -> JSONResponse:
    """404 envelope for a by-id lookup that found nothing."""
    return envelope_to_response(
        ApiResponse.failure([message], message="Not found", error_code=ErrorCode.NOT_FOUND)
    )
