from __future__ import annotations

import asyncio
import time
from collections import deque
from typing import TYPE_CHECKING, Awaitable, Callable, Deque

from loguru import logger

if TYPE_CHECKING:
    from translator.cancellation import CancellationToken

Clock = Callable[[], float]
Sleeper = Callable[[float], Awaitable[None]]


class SlidingWindowRateLimiter:
    """Rolling request-per-window ceiling shared by every call of a session.

    Callers must ``await wait_for_admission()`` and then ``record()`` right
    before each outbound request. Waiters poll; there is no FIFO ordering.
    """

    def __init__(
        self,
        *,
        max_requests: int = 60,
        window: float = 60.0,
        poll_interval: float = 1.0,
        clock: Clock = time.monotonic,
        sleep: Sleeper = asyncio.sleep,
    ) -> None:
        if max_requests < 1:
            raise ValueError("max_requests must be at least 1")
        self.max_requests = max_requests
        self.window = window
        self.poll_interval = poll_interval
        self._clock = clock
        self._sleep = sleep
        self._timestamps: Deque[float] = deque()

    def _prune(self, now: float) -> None:
        cutoff = now - self.window
        while self._timestamps and self._timestamps[0] < cutoff:
            self._timestamps.popleft()

    def admit(self) -> bool:
        self._prune(self._clock())
        return len(self._timestamps) < self.max_requests

    def record(self) -> None:
        self._timestamps.append(self._clock())

    @property
    def in_window(self) -> int:
        self._prune(self._clock())
        return len(self._timestamps)

    async def wait_for_admission(self, token: CancellationToken | None = None) -> None:
        while True:
            if token is not None:
                token.raise_if_cancelled()
            if self.admit():
                return
            logger.debug("Rate limit reached ({} requests in {:.0f}s), waiting...", self.max_requests, self.window)
            await self._sleep(self.poll_interval)
