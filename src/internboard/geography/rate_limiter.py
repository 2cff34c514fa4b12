"""
In-process rate limiter for outbound provider calls.

Callers are serialized through an ``asyncio.Lock``: each one waits for the
previous call's slot plus ``min_interval`` before proceeding, so concurrent
requests can never burst above one call per interval.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Awaitable, Callable

logger = logging.getLogger("internboard.rate_limiter")


class RateLimiter:
    """Serialize calls so that two of them are at least ``min_interval`` apart."""

    def __init__(
        self,
        min_interval: float = 1.0,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        """
        Initialize the rate limiter.

        Args:
            min_interval: Seconds between two calls (0 disables waiting)
            clock: Monotonic clock, injectable for tests
            sleep: Async sleep function, injectable for tests
        """
        if min_interval < 0:
            raise ValueError("min_interval must be >= 0")
        self._min_interval = min_interval
        self._clock = clock
        self._sleep = sleep
        self._lock = asyncio.Lock()
        self._last_call: float | None = None

    @property
    def min_interval(self) -> float:
        return self._min_interval

    @property
    def lock(self) -> asyncio.Lock:
        """Lock held for the duration of a limited call."""
        return self._lock

    async def wait(self) -> None:
        """
        Wait until the next call is allowed and reserve it.

        Must be called with :attr:`lock` held.
        """
        if self._last_call is not None:
            remaining = self._min_interval - (self._clock() - self._last_call)
            if remaining > 0:
                logger.debug(f"[RATE] Waiting {remaining:.3f}s before next call")
                await self._sleep(remaining)
        self._last_call = self._clock()
