"""Request pacing for the free-tier remote services.

SystemClock: real monotonic time and `asyncio.sleep`.
VirtualClock: deterministic time for tests; sleeping only advances the clock.

Adapters never call `asyncio.sleep` directly; they go through a `Pacer`.
"""

from __future__ import annotations

import asyncio
import time
from typing import Protocol


class Clock(Protocol):
    """Clock interface used by pacing."""

    def monotonic(self) -> float:
        """Seconds from an arbitrary fixed origin."""
        ...

    async def sleep(self, seconds: float) -> None:
        ...


class SystemClock:
    def monotonic(self) -> float:
        return time.monotonic()

    async def sleep(self, seconds: float) -> None:
        await asyncio.sleep(seconds)


class VirtualClock:
    """Simulated clock. Time moves only through `sleep` or `advance`."""

    def __init__(self, start: float = 0.0) -> None:
        self._now = start
        self.sleeps: list[float] = []

    def monotonic(self) -> float:
        return self._now

    async def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.advance(seconds)

    def advance(self, seconds: float) -> None:
        if seconds < 0:
            raise ValueError(f"VirtualClock cannot go backwards: {seconds}")
        self._now += seconds


class Pacer:
    """Enforces a minimum interval between consecutive calls.

    The first call never waits. Each later call waits until `min_interval`
    seconds have passed since the previous one started.
    """

    def __init__(self, min_interval: float, *, clock: Clock | None = None) -> None:
        if min_interval < 0:
            raise ValueError("min_interval must be >= 0")
        self.min_interval = min_interval
        self._clock = clock or SystemClock()
        self._last: float | None = None

    async def wait(self) -> None:
        if self._last is not None and self.min_interval > 0:
            remaining = self._last + self.min_interval - self._clock.monotonic()
            if remaining > 0:
                await self._clock.sleep(remaining)
        self._last = self._clock.monotonic()
