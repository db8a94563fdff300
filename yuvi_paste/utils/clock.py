"""UTC timestamp helpers."""

from datetime import UTC, datetime

ISO_FORMAT = "%Y-%m-%dT%H:%M:%S.%fZ"


def utc_now() -> datetime:
    """Return the current time as an aware UTC datetime."""
    return datetime.now(UTC)


def to_iso(moment: datetime) -> str:
    """
    Format a datetime as a fixed-width ISO 8601 UTC string.

    The fixed width (always microseconds, always ``Z``) keeps the strings
    lexicographically sortable, which the DynamoDB range keys rely on.

    Args:
        moment: Aware datetime

    Returns:
        Timestamp such as ``2025-11-11T12:00:00.000000Z``
    """
    return moment.astimezone(UTC).strftime(ISO_FORMAT)


def from_iso(value: str) -> datetime:
    """Parse a timestamp produced by :func:`to_iso`."""
    return datetime.strptime(value, ISO_FORMAT).replace(tzinfo=UTC)


def utc_now_iso() -> str:
    """Current time formatted with :func:`to_iso`."""
    return to_iso(utc_now())
