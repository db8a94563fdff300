"""Request validation middleware."""

import uuid
from collections.abc import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from yuvi_paste.config import settings
from yuvi_paste.exceptions import RequestTooLargeError
from yuvi_paste.handlers.exception_handler import error_response_from_exception


class RequestSizeValidationMiddleware(BaseHTTPMiddleware):
    """
    Reject oversized requests before the body is parsed.

    Errors raised inside BaseHTTPMiddleware bypass the application's
    exception handlers, so the 413 response is rendered here.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """
        Validate request size and process request.

        Args:
            request: The incoming request
            call_next: The next middleware/handler in the chain

        Returns:
            The response from the handler, or a 413 error response
        """
        correlation_id = request.headers.get("X-Request-ID", str(uuid.uuid4()))
        request.state.correlation_id = correlation_id

        content_length = request.headers.get("content-length")
        if content_length and content_length.isdigit():
            size = int(content_length)
            max_size = settings.max_request_size_bytes
            if size > max_size:
                size_kb = size / 1024
                max_kb = max_size / 1024
                exc = RequestTooLargeError(
                    message=f"Request size {size_kb:.1f}KB exceeds maximum {max_kb:.0f}KB",
                    max_size=f"{max_kb:.0f}KB",
                    details={"request_size": f"{size_kb:.1f}KB"},
                )
                response = error_response_from_exception(exc, correlation_id)
                response.headers["X-Request-ID"] = correlation_id
                return response

        return await call_next(request)
