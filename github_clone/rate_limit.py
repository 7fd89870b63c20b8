"""Tracks the GitHub REST rate limit from response headers.

The snapshot is advisory: it is never used to hold back a request, only to
explain a 403 after the fact.
"""

import threading
from collections.abc import Mapping
from datetime import datetime

import httpx

from .console import Console
from .models import RateLimitSnapshot

LIMIT_HEADER = "X-RateLimit-Limit"
REMAINING_HEADER = "X-RateLimit-Remaining"
RESET_HEADER = "X-RateLimit-Reset"

UNKNOWN_RESET = "in approximately one hour"
RESET_TIME_FORMAT = "%d %b %y %H:%M %Z"


class RateLimitTracker:
    """Most recently observed rate-limit counters, shared between threads."""

    def __init__(self, console: Console | None = None):
        self._console = console or Console()
        self._lock = threading.Lock()
        self._snapshot: RateLimitSnapshot | None = None

    @property
    def snapshot(self) -> RateLimitSnapshot | None:
        with self._lock:
            return self._snapshot

    def update(self, headers: Mapping[str, str]) -> None:
        """Replace the snapshot from response headers.

        Responses without rate-limit headers are ignored. A malformed value is
        reported and the previous snapshot is kept.
        """
        headers = httpx.Headers(headers)
        if LIMIT_HEADER not in headers:
            return

        values = []
        for header in (LIMIT_HEADER, REMAINING_HEADER, RESET_HEADER):
            raw = headers.get(header)
            try:
                values.append(int(raw))
            except (TypeError, ValueError):
                self._console.error(f"Error parsing rate limiting header {header}: {raw!r}")
                return

        self.record(*values)

    def record(self, limit: int, remaining: int, reset: int) -> None:
        snapshot = RateLimitSnapshot(limit=limit, remaining=remaining, reset=reset)
        with self._lock:
            self._snapshot = snapshot
        self._console.debug(
            f"Rate limit updated: {remaining} of {limit} requests remaining, "
            f"resetting {self.formatted_reset_time()}"
        )

    def is_exhausted(self) -> bool:
        snapshot = self.snapshot
        return snapshot is not None and snapshot.remaining <= 0

    def formatted_reset_time(self) -> str:
        snapshot = self.snapshot
        if snapshot is None or snapshot.reset <= 0:
            return UNKNOWN_RESET
        reset = datetime.fromtimestamp(snapshot.reset).astimezone()
        return f"on {reset.strftime(RESET_TIME_FORMAT)}"
