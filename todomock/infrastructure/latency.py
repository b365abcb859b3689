"""Latency — explicit awaitable delay standing in for network/storage round-trips.

Invariants:
    - A pause never changes results; it only yields control to the event loop
    - Every Store operation awaits exactly one pause
    - No cancellation hook: once awaited, a pause always runs to completion

Design Decisions:
    - Callable object (`await latency()`) so tests can swap in a controllable pause
      and order the resolution of concurrent operations explicitly
"""

import asyncio
from typing import Awaitable, Callable

# Anything awaitable with no arguments can stand in for a Latency
Pause = Callable[[], Awaitable[None]]


class Latency:
    """Fixed-duration pause backed by asyncio.sleep."""

    def __init__(self, delay_ms: int = 200):
        if delay_ms < 0:
            raise ValueError("delay_ms must be >= 0")
        self.delay_ms = delay_ms

    @property
    def seconds(self) -> float:
        return self.delay_ms / 1000

    async def __call__(self) -> None:
        await asyncio.sleep(self.seconds)

    def __repr__(self) -> str:
        return f"Latency(delay_ms={self.delay_ms})"
