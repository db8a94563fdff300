"""Unit tests for the sliding-window rate limiter."""

from unittest.mock import patch

import pytest

from yuvi_paste.exceptions import RateLimitError
from yuvi_paste.middleware.rate_limit import RateLimiter


@pytest.fixture
def rate_limiter() -> RateLimiter:
    """Create a fresh RateLimiter instance for each test."""
    return RateLimiter(window_seconds=60)


def test_allows_under_limit(rate_limiter: RateLimiter) -> None:
    """Requests up to the limit pass."""
    for _ in range(10):
        rate_limiter.check_rate_limit("key_1", 10)


def test_blocks_over_limit(rate_limiter: RateLimiter) -> None:
    """The request after the limit is rejected with a retry hint."""
    for _ in range(5):
        rate_limiter.check_rate_limit("key_2", 5)

    with pytest.raises(RateLimitError) as exc_info:
        rate_limiter.check_rate_limit("key_2", 5)

    error = exc_info.value
    assert error.status_code == 429
    assert error.error_code == "RATE_LIMIT_EXCEEDED"
    assert 1 <= error.retry_after <= 60
    assert error.details["limit"] == 5


def test_keys_are_independent(rate_limiter: RateLimiter) -> None:
    """One key's usage does not affect another's."""
    for _ in range(3):
        rate_limiter.check_rate_limit("key_a", 3)

    rate_limiter.check_rate_limit("key_b", 3)
    with pytest.raises(RateLimitError):
        rate_limiter.check_rate_limit("key_a", 3)


def test_window_slides(rate_limiter: RateLimiter) -> None:
    """Old requests leave the window as time passes."""
    with patch("yuvi_paste.middleware.rate_limit.time.monotonic") as mock_clock:
        mock_clock.return_value = 1000.0
        rate_limiter.check_rate_limit("key_3", 2)
        mock_clock.return_value = 1030.0
        rate_limiter.check_rate_limit("key_3", 2)

        with pytest.raises(RateLimitError) as exc_info:
            rate_limiter.check_rate_limit("key_3", 2)
        assert exc_info.value.retry_after == 30

        mock_clock.return_value = 1060.0
        rate_limiter.check_rate_limit("key_3", 2)


def test_rejected_requests_do_not_count(rate_limiter: RateLimiter) -> None:
    """Only accepted requests occupy the window."""
    with patch("yuvi_paste.middleware.rate_limit.time.monotonic") as mock_clock:
        mock_clock.return_value = 0.0
        rate_limiter.check_rate_limit("key_4", 1)
        for _ in range(5):
            with pytest.raises(RateLimitError):
                rate_limiter.check_rate_limit("key_4", 1)

        mock_clock.return_value = 60.0
        rate_limiter.check_rate_limit("key_4", 1)


def test_reset_and_clear(rate_limiter: RateLimiter) -> None:
    """Resetting forgets the recorded requests."""
    rate_limiter.check_rate_limit("key_5", 1)
    rate_limiter.reset_key("key_5")
    rate_limiter.check_rate_limit("key_5", 1)

    rate_limiter.clear_all()
    rate_limiter.check_rate_limit("key_5", 1)


def test_idle_keys_are_dropped() -> None:
    """Keys with an empty window stop occupying memory."""
    with patch("yuvi_paste.middleware.rate_limit.time.monotonic") as mock_clock:
        mock_clock.return_value = 0.0
        limiter = RateLimiter(window_seconds=60)
        limiter.check_rate_limit("key_idle", 5)
        limiter.check_rate_limit("key_busy", 5)
        assert limiter.tracked_keys() == 2

        mock_clock.return_value = 61.0
        limiter.check_rate_limit("key_busy", 5)

        assert limiter.tracked_keys() == 1


def test_sweep_keeps_live_windows() -> None:
    """Keys with hits inside the window survive a sweep."""
    with patch("yuvi_paste.middleware.rate_limit.time.monotonic") as mock_clock:
        mock_clock.return_value = 0.0
        limiter = RateLimiter(window_seconds=60)
        limiter.check_rate_limit("key_old", 5)
        mock_clock.return_value = 30.0
        limiter.check_rate_limit("key_recent", 1)

        mock_clock.return_value = 70.0
        limiter.check_rate_limit("key_other", 5)

        assert limiter.tracked_keys() == 2
        with pytest.raises(RateLimitError):
            limiter.check_rate_limit("key_recent", 1)
