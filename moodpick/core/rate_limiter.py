import asyncio
import time
from collections.abc import Callable

from loguru import logger


class RateLimiter:
    """Serializes request starts so that consecutive grants are at least
    ``min_interval`` seconds apart.

    Waiters queue on an ``asyncio.Lock`` in call order. The second caller waits
    relative to the first caller's grant, not to its own start.
    """

    def __init__(self, min_interval: float = 1.0, clock: Callable[[], float] = time.monotonic):
        self.min_interval = float(min_interval)
        self._clock = clock
        self._lock = asyncio.Lock()
        self._last_grant: float | None = None

    @property
    def last_grant(self) -> float | None:
        return self._last_grant

    async def acquire(self) -> None:
        """Wait until a new request may start, then record the grant."""
        async with self._lock:
            now = self._clock()
            if self._last_grant is not None:
                # asyncio timers may fire a clock tick early, so re-check
                wait_for = (self._last_grant + self.min_interval) - now
                while wait_for > 0:
                    logger.debug(f"Rate limiter sleeping {wait_for:.3f}s")
                    await asyncio.sleep(wait_for)
                    now = self._clock()
                    wait_for = (self._last_grant + self.min_interval) - now
            self._last_grant = now

    def reset(self) -> None:
        """Forget the previous grant."""
        self._last_grant = None
