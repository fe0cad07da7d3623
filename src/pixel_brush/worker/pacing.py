"""
Pacing
======

Jittered pause between two pixels of one worker.

Painting at a steady machine rate gets a client flagged by the canvas
service, so every worker waits a random delay sampled uniformly from
[min_delay, max_delay] after each pixel. All workers share one RNG
behind a lock.
"""

import asyncio
import logging
import random
from typing import Awaitable, Callable, Optional


logger = logging.getLogger(__name__)


SleepFunc = Callable[[float], Awaitable[None]]


class JitterSleeper:
    """
    Uniform random delay generator shared by all workers.

    Attributes:
        min_delay: Lower bound in seconds
        max_delay: Upper bound in seconds

    Example:
        pacing = JitterSleeper(65.0, 180.0)
        await pacing.pause()
    """

    def __init__(
        self,
        min_delay: float,
        max_delay: float,
        seed: Optional[int] = None,
        sleep: SleepFunc = asyncio.sleep,
    ) -> None:
        """
        Initialize the sleeper.

        Args:
            min_delay: Lower bound in seconds
            max_delay: Upper bound in seconds, must be >= min_delay
            seed: RNG seed (None = OS entropy)
            sleep: Coroutine used to wait
        """
        if min_delay < 0 or max_delay < min_delay:
            raise ValueError(
                f"Invalid delay bounds: [{min_delay}, {max_delay}]"
            )

        self.min_delay = min_delay
        self.max_delay = max_delay
        self._rng = random.Random(seed)
        self._lock = asyncio.Lock()
        self._sleep = sleep

    async def sample(self) -> float:
        """Draw the next delay in seconds."""
        async with self._lock:
            return self._rng.uniform(self.min_delay, self.max_delay)

    async def pause(self) -> float:
        """
        Wait for one jittered delay.

        Returns:
            The delay that was waited, in seconds
        """
        delay = await self.sample()
        logger.debug(f"Pausing for {delay:.1f}s")
        await self._sleep(delay)
        return delay
