"""Client-side sliding window rate limiter."""
from __future__ import annotations

import asyncio
import logging
import time
from collections import deque
from dataclasses import dataclass
from typing import Awaitable, Callable, Deque, Optional

LOGGER = logging.getLogger(__name__)

DEFAULT_WINDOW_MS = 300_000


@dataclass(frozen=True)
class RateLimitConfig:
    """Quota settings for one client.

    ``max_requests_per_window`` of ``None`` means no quota is enforced.
    """

    max_requests_per_window: Optional[int] = None
    window_ms: int = DEFAULT_WINDOW_MS

    def __post_init__(self) -> None:
        limit = self.max_requests_per_window
        if limit is not None and (isinstance(limit, bool) or not isinstance(limit, int) or limit <= 0):
            raise ValueError("max_requests_per_window must be a positive integer or None")
        if self.window_ms <= 0:
            raise ValueError("window_ms must be positive")

    @property
    def unlimited(self) -> bool:
        return self.max_requests_per_window is None

    @property
    def window_seconds(self) -> float:
        return self.window_ms / 1000


class RateLimiter:
    """Admits requests so that no trailing window holds more than the quota.

    Admission timestamps are kept oldest first in a deque. Each ``admit()``
    drops the records that have left the window, waits for the oldest
    survivor to expire when the quota is used up, then records the time the
    caller was let through. The whole sequence runs under a lock, so callers
    sharing an event loop are admitted one at a time in arrival order.
    """

    def __init__(
        self,
        config: RateLimitConfig,
        *,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[object]] = asyncio.sleep,
    ) -> None:
        self.config = config
        self._clock = clock
        self._sleep = sleep
        self._queue: Deque[float] = deque()
        self._lock = asyncio.Lock()

    def pending(self) -> int:
        """Drop expired admissions and return how many are left in the window."""

        self._prune(self._clock())
        return len(self._queue)

    def reset(self) -> None:
        self._queue.clear()

    def _prune(self, now: float) -> None:
        window = self.config.window_seconds
        while self._queue and self._queue[0] + window <= now:
            self._queue.popleft()

    def _wait_time(self, now: float) -> float:
        limit = self.config.max_requests_per_window
        if limit is None or len(self._queue) < limit:
            return 0.0
        return self._queue[0] + self.config.window_seconds - now

    async def admit(self) -> float:
        """Wait until a request may be sent and record it.

        Returns the clock reading stored for this admission.
        """

        async with self._lock:
            now = self._clock()
            self._prune(now)
            wait = self._wait_time(now)
            while wait > 0:
                LOGGER.debug(
                    "rate limit reached, waiting",
                    extra={"wait_seconds": round(wait, 3)},
                )
                await self._sleep(wait)
                now = self._clock()
                self._prune(now)
                wait = self._wait_time(now)
            self._queue.append(now)
            return now
