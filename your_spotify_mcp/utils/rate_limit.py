"""Per-upstream request limiter shared by every call through one client.

A :class:`RequestLimiter` combines three budgets, each optional:

1. **max_concurrent** -- an ``asyncio.Semaphore`` bounding in-flight requests.
2. **min_interval** -- minimum spacing between consecutive request starts,
   the same ``time.monotonic`` / ``asyncio.sleep`` throttle the providers
   have always used.
3. **reservoir** -- a quota of requests per ``reservoir_period`` seconds
   that refills in full when the period elapses.

The Your Spotify client uses ``max_concurrent=1, min_interval=0.2`` (strict
serialization at ~5 req/s); the Spotify client uses ``max_concurrent=5,
min_interval=0.05, reservoir=180`` per minute.  Concurrent sub-fetches of a
single tool call queue on the same limiter as everything else.
"""

from __future__ import annotations

import asyncio
import time
from typing import Awaitable, Callable


class RequestLimiter:
    """Async context manager enforcing concurrency, spacing and quota."""

    def __init__(
        self,
        min_interval: float = 0.0,
        max_concurrent: int = 1,
        reservoir: int | None = None,
        reservoir_period: float = 60.0,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        if max_concurrent < 1:
            raise ValueError("max_concurrent must be at least 1")
        self._min_interval = min_interval
        self._semaphore = asyncio.Semaphore(max_concurrent)
        self._lock = asyncio.Lock()
        self._reservoir = reservoir
        self._reservoir_period = reservoir_period
        self._remaining = reservoir
        self._window_start: float | None = None
        self._last_request_time: float = 0.0
        self._clock = clock
        self._sleep = sleep

    @property
    def remaining(self) -> int | None:
        """Requests left in the current reservoir window (``None`` if unlimited)."""
        return self._remaining

    async def acquire(self) -> None:
        await self._semaphore.acquire()
        try:
            # The lock keeps the spacing and quota bookkeeping atomic across
            # the sleeps below.
            async with self._lock:
                await self._take_from_reservoir()
                await self._throttle()
        except BaseException:
            self._semaphore.release()
            raise

    def release(self) -> None:
        self._semaphore.release()

    async def __aenter__(self) -> RequestLimiter:
        await self.acquire()
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        self.release()

    async def _take_from_reservoir(self) -> None:
        if self._reservoir is None:
            return
        now = self._clock()
        if self._window_start is None or now - self._window_start >= self._reservoir_period:
            self._window_start = now
            self._remaining = self._reservoir
        if self._remaining is not None and self._remaining <= 0:
            await self._sleep(self._reservoir_period - (now - self._window_start))
            self._window_start = self._clock()
            self._remaining = self._reservoir
        if self._remaining is not None:
            self._remaining -= 1

    async def _throttle(self) -> None:
        """Enforce minimum interval between request starts."""
        if self._min_interval <= 0:
            return
        now = self._clock()
        elapsed = now - self._last_request_time
        if self._last_request_time > 0 and elapsed < self._min_interval:
            await self._sleep(self._min_interval - elapsed)
        self._last_request_time = self._clock()
