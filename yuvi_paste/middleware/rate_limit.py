"""Per-API-key rate limiting using an in-memory sliding window."""

import threading
import time
from collections import deque
from typing import Deque, Dict

from yuvi_paste.exceptions import RateLimitError


class RateLimiter:
    """
    Sliding-window rate limiter keyed by API key id.

    Keeps the timestamps of accepted requests within the last window.
    State is per process and resets on restart (one Lambda container
    or one uvicorn worker each keep their own window). Keys with no hits
    in the last window are dropped, at most once per window.
    """

    def __init__(self, window_seconds: int = 60) -> None:
        """
        Initialize rate limiter with in-memory storage.

        Args:
            window_seconds: Length of the sliding window
        """
        self._window_seconds = window_seconds
        self._hits: Dict[str, Deque[float]] = {}
        self._lock = threading.Lock()
        self._last_sweep = time.monotonic()

    def check_rate_limit(self, key_id: str, limit: int) -> None:
        """
        Record a request, or reject it if the window is full.

        Args:
            key_id: API key identifier
            limit: Maximum requests allowed per window

        Raises:
            RateLimitError: If rate limit is exceeded
        """
        now = time.monotonic()
        with self._lock:
            if now - self._last_sweep >= self._window_seconds:
                self._sweep(now)

            hits = self._hits.setdefault(key_id, deque())
            self._prune(hits, now)

            if len(hits) >= limit:
                retry_after = max(1, int(self._window_seconds - (now - hits[0])))
                raise RateLimitError(
                    message=f"Rate limit exceeded: {limit} requests/minute",
                    retry_after=retry_after,
                    details={
                        "limit": limit,
                        "window_seconds": self._window_seconds,
                    },
                )

            hits.append(now)

    def tracked_keys(self) -> int:
        """Number of keys currently holding a window."""
        with self._lock:
            return len(self._hits)

    def reset_key(self, key_id: str) -> None:
        """Forget the window of one key."""
        with self._lock:
            self._hits.pop(key_id, None)

    def clear_all(self) -> None:
        """Clear all windows (useful for testing)."""
        with self._lock:
            self._hits.clear()

    def _prune(self, hits: Deque[float], now: float) -> None:
        while hits and now - hits[0] >= self._window_seconds:
            hits.popleft()

    def _sweep(self, now: float) -> None:
        """Drop every key whose window has emptied. Caller holds the lock."""
        for key_id in list(self._hits):
            hits = self._hits[key_id]
            self._prune(hits, now)
            if not hits:
                del self._hits[key_id]
        self._last_sweep = now


# Global rate limiter instance
rate_limiter = RateLimiter()
