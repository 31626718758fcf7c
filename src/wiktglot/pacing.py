"""
pacing.py - Sliding-window admission queue for outbound requests.

Wiktionary asks API clients to stay under a modest request rate. A pacer
admits at most ``max_requests`` requests in any ``per_seconds`` window; a
caller arriving when the window is full waits until the oldest admission
leaves it, then checks again.
"""

import asyncio
import logging
import time
from collections import deque
from typing import Awaitable, Callable, Deque, Optional

from wiktglot.config import LookupConfig
from wiktglot.errors import ConfigurationError

logger = logging.getLogger(__name__)


class RequestPacer:
    """At most max_requests admissions per sliding window of per_seconds."""

    def __init__(
        self,
        max_requests: int,
        per_seconds: float,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        if max_requests < 1:
            raise ConfigurationError("max_requests must be at least 1")
        if per_seconds <= 0:
            raise ConfigurationError("per_seconds must be positive")
        self.max_requests = max_requests
        self.per_seconds = per_seconds
        self._clock = clock
        self._sleep = sleep
        self._admitted: Deque[float] = deque()
        self._lock = asyncio.Lock()

    @classmethod
    def from_config(cls, config: LookupConfig) -> Optional["RequestPacer"]:
        """A pacer for the configured rate, or None when pacing is off."""
        if not config.pacing_enabled:
            return None
        return cls(config.rate_limit_requests, config.rate_limit_window)

    def _expire(self, now: float) -> None:
        while self._admitted and now - self._admitted[0] >= self.per_seconds:
            self._admitted.popleft()

    @property
    def in_window(self) -> int:
        """Admissions still inside the current window."""
        self._expire(self._clock())
        return len(self._admitted)

    async def acquire(self) -> None:
        """Wait for a free slot in the window, then take it."""
        async with self._lock:
            while True:
                now = self._clock()
                self._expire(now)
                if len(self._admitted) < self.max_requests:
                    self._admitted.append(now)
                    return

                wait_time = self.per_seconds - (now - self._admitted[0])
                logger.debug(f"Request window full, waiting {wait_time:.2f}s")
                await self._sleep(max(0.0, wait_time))
