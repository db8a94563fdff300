"""Logging configuration with JSON formatting."""

import json
import logging
import sys
from datetime import UTC, datetime
from typing import Any

from yuvi_paste.config import settings

# Context keys whose values must never reach the log stream
REDACTED_KEYS = frozenset(
    {"password", "api_key", "secret", "session_token", "authorization", "code"}
)
REDACTED = "[REDACTED]"


def _redact(context: dict[str, Any]) -> dict[str, Any]:
    return {
        key: REDACTED if key.lower() in REDACTED_KEYS else value
        for key, value in context.items()
    }


class JSONFormatter(logging.Formatter):
    """
    Format log records as single-line JSON objects.

    Fields: timestamp (UTC), level, logger, message, correlation_id when
    the request middleware supplied one, and the flattened ``context``
    dict passed through ``extra``. Credential-like context keys are
    replaced with a placeholder.
    """

    def format(self, record: logging.LogRecord) -> str:
        """
        Format the log record as JSON.

        Args:
            record: The log record to format

        Returns:
            JSON string representation of the log record
        """
        log_data: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        correlation_id = getattr(record, "correlation_id", None)
        if correlation_id:
            log_data["correlation_id"] = correlation_id

        context = getattr(record, "context", None)
        if isinstance(context, dict):
            log_data.update(_redact(context))

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        if record.levelno == logging.DEBUG:
            log_data["file"] = record.pathname
            log_data["line"] = record.lineno
            log_data["function"] = record.funcName

        return json.dumps(log_data, default=str)


def configure_logging(level: str | None = None) -> None:
    """
    Configure application logging with JSON formatter.

    Sets up the root logger to output structured JSON logs to stdout.

    Args:
        level: Log level name; defaults to the LOG_LEVEL setting
    """
    level_name = (level or settings.log_level).upper()
    log_level = getattr(logging, level_name, logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    # Remove existing handlers to avoid duplicates
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(JSONFormatter())
    root_logger.addHandler(console_handler)

    # botocore logs request signing details at DEBUG
    logging.getLogger("botocore").setLevel(max(log_level, logging.INFO))

    root_logger.info(
        "Logging configured",
        extra={"context": {"log_level": level_name}},
    )


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance with the specified name.

    Args:
        name: The name of the logger (typically __name__)

    Returns:
        Logger instance
    """
    return logging.getLogger(name)
