"""Global exception handlers for consistent error responses."""

from typing import Any

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from yuvi_paste.exceptions import PasteAPIError, RateLimitError
from yuvi_paste.logging.config import get_logger

logger = get_logger(__name__)


def create_error_response(
    error_code: str,
    message: str,
    status_code: int,
    details: dict[str, Any] | None = None,
    correlation_id: str | None = None,
) -> JSONResponse:
    """
    Create standardized error response.

    Args:
        error_code: Machine-readable error code
        message: Human-readable error message
        status_code: HTTP status code
        details: Additional error details
        correlation_id: Request correlation ID for tracing

    Returns:
        JSONResponse with error information
    """
    content = {
        "status": "error",
        "error_code": error_code,
        "message": message,
        "details": details or {},
    }

    if correlation_id:
        content["correlation_id"] = correlation_id

    return JSONResponse(status_code=status_code, content=content)


def error_response_from_exception(
    exc: PasteAPIError, correlation_id: str | None = None
) -> JSONResponse:
    """
    Render a PasteAPIError as a standardized error response.

    Adds a Retry-After header for rate limit errors.

    Args:
        exc: PasteAPIError instance
        correlation_id: Request correlation ID for tracing

    Returns:
        JSONResponse with error details
    """
    response = create_error_response(
        error_code=exc.error_code,
        message=exc.message,
        status_code=exc.status_code,
        details=exc.details,
        correlation_id=correlation_id,
    )
    if isinstance(exc, RateLimitError):
        response.headers["Retry-After"] = str(exc.retry_after)
    return response


async def paste_api_exception_handler(
    request: Request, exc: PasteAPIError
) -> JSONResponse:
    """
    Handle custom PasteAPIError.

    Args:
        request: FastAPI request
        exc: PasteAPIError instance

    Returns:
        JSONResponse with error details
    """
    correlation_id = getattr(request.state, "correlation_id", None)

    if exc.status_code >= 500:
        logger.warning(
            f"Request failed: {exc.error_code}",
            extra={
                "correlation_id": correlation_id,
                "context": {"path": request.url.path, "details": exc.details},
            },
        )

    return error_response_from_exception(exc, correlation_id)


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """
    Handle Pydantic validation errors from FastAPI.

    Formats validation errors into user-friendly, actionable messages.

    Args:
        request: FastAPI request
        exc: RequestValidationError from Pydantic

    Returns:
        JSONResponse with validation error details
    """
    correlation_id = getattr(request.state, "correlation_id", None)

    errors = exc.errors()
    details: dict[str, Any] = {"validation_errors": []}
    error_messages = []

    for error in errors:
        # Build field path (skip 'body' prefix for cleaner messages)
        field_parts = [str(loc) for loc in error["loc"] if loc != "body"]
        field = ".".join(field_parts) if field_parts else "request"

        msg = error["msg"]
        error_type = error["type"]

        if error_type == "missing":
            msg = "Field is required"
        elif error_type == "value_error":
            msg = f"Invalid value: {msg}"

        details["validation_errors"].append(
            {"field": field, "message": msg, "type": error_type}
        )
        error_messages.append(f"{field}: {msg}")

    summary = error_messages[0] if error_messages else "Invalid request data"
    if len(error_messages) > 1:
        summary += f" (and {len(error_messages) - 1} more errors)"

    return create_error_response(
        error_code="VALIDATION_ERROR",
        message=summary,
        status_code=status.HTTP_400_BAD_REQUEST,
        details=details,
        correlation_id=correlation_id,
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Handle unexpected exceptions.

    Logs full traceback and returns generic error to client.
    DynamoDB connectivity failures are reported as 503.

    Args:
        request: FastAPI request
        exc: Any unhandled exception

    Returns:
        JSONResponse with generic error message
    """
    correlation_id = getattr(request.state, "correlation_id", None)

    logger.error(
        f"Unhandled exception: {type(exc).__name__}: {str(exc)}",
        exc_info=exc,
        extra={
            "correlation_id": correlation_id,
            "context": {
                "exception_type": type(exc).__name__,
                "method": request.method,
                "path": request.url.path,
            },
        },
    )

    exc_str = str(exc).lower()
    exc_type = type(exc).__name__

    if any(
        keyword in exc_str for keyword in ["connection", "timeout", "unavailable"]
    ) or any(keyword in exc_type for keyword in ["ConnectionError", "TimeoutError"]):
        return create_error_response(
            error_code="SERVICE_UNAVAILABLE",
            message="Service temporarily unavailable. Please try again later.",
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            details={"retry_after": 60},
            correlation_id=correlation_id,
        )

    return create_error_response(
        error_code="INTERNAL_ERROR",
        message="An internal error occurred. Please contact support with the correlation ID.",
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        details={},
        correlation_id=correlation_id,
    )
