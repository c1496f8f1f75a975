"""Monotonic clocks for driving the rotation."""
from __future__ import annotations

import time


class MonotonicClock:
    """Wall clock backed by ``time.monotonic``."""

    def now(self) -> float:
        return time.monotonic()


class ManualClock:
    """Clock that only moves when told to. Used for simulation and tests."""

    def __init__(self, start: float = 0.0) -> None:
        self._now = start

    def now(self) -> float:
        return self._now

    def advance(self, seconds: float) -> float:
        """Move forward and return the new reading."""
        if seconds < 0:
            raise ValueError(f"cannot advance by a negative amount: {seconds}")
        self._now += seconds
        return self._now

    def set(self, t: float) -> None:
        if t < self._now:
            raise ValueError(f"clock cannot go backwards ({t} < {self._now})")
        self._now = t
