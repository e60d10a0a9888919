"""Per-host politeness delay between sequential requests."""

import asyncio
import time
from contextlib import asynccontextmanager
from typing import AsyncIterator, Awaitable, Callable, Dict

from currentaffairs.utils.logging import get_logger

logger = get_logger(__name__)


class RateLimiter:
    """Enforce a minimum gap between requests to the same host.

    The gap runs from the end of one request to the start of the next.
    Requests to one host are serialized while a slot is held; different
    hosts never wait on each other.
    """

    def __init__(
        self,
        min_interval: float = 1.0,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        """Initialize rate limiter.

        Args:
            min_interval: Minimum seconds between requests to one host
            clock: Monotonic seconds source
            sleep: Coroutine used to wait; tests pass one that advances a fake clock
        """
        if min_interval < 0:
            raise ValueError("min_interval must be >= 0")
        self.min_interval = min_interval
        self._clock = clock
        self._sleep = sleep
        self._last_release: Dict[str, float] = {}
        self._locks: Dict[str, asyncio.Lock] = {}

    @asynccontextmanager
    async def slot(self, host: str) -> AsyncIterator[float]:
        """Hold the host for one request.

        Yields:
            Seconds waited before the slot was granted
        """
        lock = self._locks.setdefault(host, asyncio.Lock())
        async with lock:
            waited = 0.0
            last = self._last_release.get(host)
            if last is not None:
                remaining = self.min_interval - (self._clock() - last)
                if remaining > 0:
                    logger.debug("rate_limit_wait", host=host, seconds=round(remaining, 3))
                    await self._sleep(remaining)
                    waited = remaining
            try:
                yield waited
            finally:
                self._last_release[host] = self._clock()
