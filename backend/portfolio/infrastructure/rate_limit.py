"""Rate Limiting — in-memory fixed-window counters keyed by client address.

Invariants:
    - Each limiter counts independently; a request may be charged to several
    - The (limit + 1)th hit inside one window raises RateLimitExceededError
    - A window starts at a client's first hit and resets window_seconds later
    - State lives on the instance only; nothing persists across restarts

Design Decisions:
    - Instances created by create_app() and stored on app.state, never module globals
    - Clock injectable (time.monotonic by default) so tests can step time
"""

import logging
import math
import time
from collections.abc import Callable
from dataclasses import dataclass

from portfolio.core.errors import ErrorContext, RateLimitExceededError

logger = logging.getLogger(__name__)


@dataclass
class _Window:
    started_at: float
    count: int = 0


class FixedWindowRateLimiter:
    """Allow `limit` hits per client per `window_seconds`."""

    def __init__(
        self,
        name: str,
        limit: int,
        window_seconds: float,
        message: str,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.name = name
        self.limit = limit
        self.window_seconds = window_seconds
        self.message = message
        self._clock = clock
        self._windows: dict[str, _Window] = {}

    def hit(self, client: str) -> None:
        """Count one request for `client`, raising once the quota is spent."""
        now = self._clock()
        self._evict_expired(now)
        window = self._windows.get(client)
        if window is None:
            window = self._windows[client] = _Window(started_at=now)
        window.count += 1
        if window.count > self.limit:
            retry_after = max(
                1, math.ceil(window.started_at + self.window_seconds - now),
            )
            logger.warning(
                f"Rate limit '{self.name}' exceeded",
                extra={"client": client, "error_code": "RATE_LIMITED"},
            )
            raise RateLimitExceededError(
                self.message, retry_after, ErrorContext(client=client),
            )

    def remaining(self, client: str) -> int:
        window = self._windows.get(client)
        if window is None or self._expired(window, self._clock()):
            return self.limit
        return max(0, self.limit - window.count)

    def reset(self) -> None:
        self._windows.clear()

    def _expired(self, window: _Window, now: float) -> bool:
        return now - window.started_at >= self.window_seconds

    def _evict_expired(self, now: float) -> None:
        expired = [k for k, w in self._windows.items() if self._expired(w, now)]
        for key in expired:
            del self._windows[key]
