"""FastAPI exception handlers for converting PricingError to HTTP responses.

Caller-contract violations detected at the API boundary are raised as
PricingError and rendered as ErrorResponse JSON:
- 400 Bad Request: incomplete dates, inverted ranges, bad percentages,
  stay rules not met
- 409 Conflict: the existing period set already overlaps (stale calendar)

Usage:
    from rental_pricing_api.exceptions import register_exception_handlers
    register_exception_handlers(app)
"""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.status import (
    HTTP_400_BAD_REQUEST,
    HTTP_409_CONFLICT,
    HTTP_500_INTERNAL_SERVER_ERROR,
)

from rental_pricing.models.errors import ErrorCode, PricingError
from rental_pricing.utils.logging import get_logger

logger = get_logger(__name__)

ERROR_CODE_TO_HTTP_STATUS: dict[ErrorCode, int] = {
    ErrorCode.DATES_INCOMPLETE: HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_PERIOD_RANGE: HTTP_400_BAD_REQUEST,
    ErrorCode.PERCENT_OUT_OF_RANGE: HTTP_400_BAD_REQUEST,
    ErrorCode.MINIMUM_NIGHTS_NOT_MET: HTTP_400_BAD_REQUEST,
    ErrorCode.MAX_GUESTS_EXCEEDED: HTTP_400_BAD_REQUEST,
    ErrorCode.PERIOD_ID_MISSING: HTTP_400_BAD_REQUEST,
    ErrorCode.OVERLAPPING_PERIODS: HTTP_409_CONFLICT,
}


def get_http_status_for_error(code: ErrorCode) -> int:
    """Get HTTP status code for an ErrorCode (400 when not mapped)."""
    return ERROR_CODE_TO_HTTP_STATUS.get(code, HTTP_400_BAD_REQUEST)


async def pricing_error_handler(request: Request, exc: PricingError) -> JSONResponse:
    """Convert a PricingError into an ErrorResponse JSON body.

    Args:
        request: The incoming request (unused but required by FastAPI)
        exc: The PricingError exception

    Returns:
        JSONResponse with error details and appropriate status code.
    """
    status_code = get_http_status_for_error(exc.code)
    logger.info(
        "Rejected %s %s: %s (%s)",
        request.method,
        request.url.path,
        exc.code.value,
        exc.details or {},
    )

    return JSONResponse(
        status_code=status_code,
        content=exc.to_error_response().model_dump(mode="json"),
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions with a generic error response.

    Args:
        request: The incoming request (unused but required by FastAPI)
        exc: The uncaught exception

    Returns:
        JSONResponse with 500 status and generic error message.
    """
    logger.exception("Unhandled exception: %s", exc)

    error_response = {
        "success": False,
        "error_code": "ERR_INTERNAL",
        "message": "An unexpected error occurred",
        "recovery": "Please try again later or contact support",
        "details": None,
    }

    return JSONResponse(
        status_code=HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_response,
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers with the FastAPI app.

    Args:
        app: The FastAPI application instance.
    """
    app.add_exception_handler(PricingError, pricing_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, generic_exception_handler)
