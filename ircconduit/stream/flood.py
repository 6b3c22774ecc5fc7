# ircconduit/stream/flood.py
"""
Flood protection for outbound traffic.

A FloodProtector holds back each item until at least `delay` seconds
have passed since the previous item went through the same instance.
Each instance owns its timestamp and lock, so independent connections
do not throttle each other.
"""

import asyncio
import time
from collections.abc import AsyncIterable, AsyncIterator
from typing import TypeVar

T = TypeVar("T")


class FloodProtector:
    def __init__(self, delay: float):
        if delay < 0:
            raise ValueError(f"flood delay must be >= 0, got {delay!r}")

        self.delay = delay
        self._last = time.monotonic()
        self._lock = asyncio.Lock()

    # ------------------------------------------------------------------

    async def wait(self) -> None:
        """Block until the next item is allowed through."""
        async with self._lock:
            deadline = self._last + self.delay
            now = time.monotonic()

            # The event loop may wake a timer up to one clock tick early
            while now < deadline:
                await asyncio.sleep(deadline - now)
                now = time.monotonic()

            # Stamp with the wake-up time, not the deadline
            self._last = time.monotonic()

    async def pass_through(self, item: T) -> T:
        await self.wait()
        return item

    async def protect(self, source: AsyncIterable[T]) -> AsyncIterator[T]:
        """Rate-limit an async stream."""
        async for item in source:
            yield await self.pass_through(item)


def flood_protector(delay: float, source: AsyncIterable[T]) -> AsyncIterator[T]:
    return FloodProtector(delay).protect(source)
