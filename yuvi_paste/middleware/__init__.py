"""Middleware components for request processing."""

from yuvi_paste.middleware.logging import LoggingMiddleware
from yuvi_paste.middleware.rate_limit import RateLimiter, rate_limiter
from yuvi_paste.middleware.request_validation import RequestSizeValidationMiddleware

__all__ = [
    "LoggingMiddleware",
    "RateLimiter",
    "rate_limiter",
    "RequestSizeValidationMiddleware",
]
