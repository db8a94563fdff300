"""Request logging middleware with correlation ID support."""

import logging
import time
import uuid
from collections.abc import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from yuvi_paste.logging.config import get_logger

logger = get_logger(__name__)

# Paths polled by load balancers; logged at DEBUG only
QUIET_PATHS = frozenset({"/status"})


def _request_context(request: Request) -> dict:
    """Describe a request without credentials or query values."""
    return {
        "method": request.method,
        "path": request.url.path,
        "query_keys": sorted(request.query_params.keys()),
        "client_host": request.client.host if request.client else None,
        "has_session": "x-session-token" in request.headers,
    }


class LoggingMiddleware(BaseHTTPMiddleware):
    """
    Log every HTTP request with a correlation ID.

    The correlation ID is taken from ``X-Request-ID`` when supplied and
    echoed back on the response. Credentials (Authorization, X-API-Key,
    X-Session-Token) are never logged; once a route authenticates an API
    key, only its ``key_id`` appears in the completion record.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """
        Process the request and add logging.

        Args:
            request: The incoming request
            call_next: The next middleware/handler in the chain

        Returns:
            The response from the handler
        """
        correlation_id = getattr(request.state, "correlation_id", None) or request.headers.get(
            "X-Request-ID", str(uuid.uuid4())
        )
        request.state.correlation_id = correlation_id

        level = logging.DEBUG if request.url.path in QUIET_PATHS else logging.INFO
        context = _request_context(request)
        logger.log(
            level,
            "Request started",
            extra={"correlation_id": correlation_id, "context": context},
        )

        start_time = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception as exc:
            logger.error(
                "Request failed with exception",
                exc_info=exc,
                extra={
                    "correlation_id": correlation_id,
                    "context": {
                        **context,
                        "response_time_ms": round(
                            (time.perf_counter() - start_time) * 1000, 2
                        ),
                    },
                },
            )
            raise

        logger.log(
            level,
            "Request completed",
            extra={
                "correlation_id": correlation_id,
                "context": {
                    "method": request.method,
                    "path": request.url.path,
                    "status_code": response.status_code,
                    "response_time_ms": round(
                        (time.perf_counter() - start_time) * 1000, 2
                    ),
                    "api_key_id": getattr(request.state, "api_key_id", None),
                },
            },
        )

        response.headers["X-Request-ID"] = correlation_id
        return response
