"""Millisecond clocks.

Every component needing the time (hold time, cooldown, voxel timestamps) receives the same
clock, so they never disagree and tests can drive time by hand.
"""

from __future__ import annotations

import time
from typing import Protocol


class Clock(Protocol):
    def now(self) -> int:
        """Current time, in milliseconds."""
        ...


class MonotonicClock:
    def now(self) -> int:
        return time.monotonic_ns() // 1_000_000


class ManualClock:
    """A clock only moving when told to. Used for replays and tests."""

    def __init__(self, start: int = 0) -> None:
        self.current = start

    def now(self) -> int:
        return self.current

    def set(self, timestamp: int) -> None:
        if timestamp < self.current:
            raise ValueError(f"Time cannot go backwards ({timestamp} < {self.current})")
        self.current = timestamp

    def advance(self, delta: int) -> int:
        self.set(self.current + delta)
        return self.current
