"""TickLoop - fixed-cadence driver, pacing, and lifecycle hooks."""
from __future__ import annotations

import time
from typing import TYPE_CHECKING, Callable

from tick_rotation.clock import ManualClock

if TYPE_CHECKING:
    from tick_rotation.rotation import Rotation


class TickLoop:
    """Calls ``Rotation.tick`` at a fixed rate.

    With a ``ManualClock`` every step advances simulated time by ``dt``
    before ticking, so ``run`` replays a fight instantly. With any other
    clock only ``run_forever`` makes sense: it sleeps to hold the rate.
    """

    def __init__(
        self,
        rotation: Rotation,
        clock: ManualClock | None = None,
        tps: int = 20,
    ) -> None:
        if tps <= 0:
            raise ValueError("tps must be positive")
        self._rotation = rotation
        self._clock = clock
        self._tps = tps
        self._dt = 1.0 / tps
        self._tick_number = 0
        self._start_hooks: list[Callable[[Rotation], None]] = []
        self._stop_hooks: list[Callable[[Rotation], None]] = []
        self._stop_requested: bool = False

    @property
    def tps(self) -> int:
        return self._tps

    @property
    def dt(self) -> float:
        return self._dt

    @property
    def tick_number(self) -> int:
        return self._tick_number

    def on_start(self, hook: Callable[[Rotation], None]) -> None:
        self._start_hooks.append(hook)

    def on_stop(self, hook: Callable[[Rotation], None]) -> None:
        self._stop_hooks.append(hook)

    def request_stop(self) -> None:
        self._stop_requested = True

    def _tick(self) -> tuple[int, ...]:
        self._tick_number += 1
        if self._clock is not None:
            self._clock.advance(self._dt)
        return self._rotation.tick()

    def step(self) -> tuple[int, ...]:
        self._stop_requested = False
        return self._tick()

    def run(self, n: int) -> list[tuple[int, ...]]:
        """Run up to ``n`` ticks. Returns what executed on each tick."""
        self._stop_requested = False
        for hook in self._start_hooks:
            hook(self._rotation)

        results: list[tuple[int, ...]] = []
        for _ in range(n):
            results.append(self._tick())
            if self._stop_requested:
                break

        for hook in self._stop_hooks:
            hook(self._rotation)
        return results

    def run_forever(self) -> None:
        self._stop_requested = False
        for hook in self._start_hooks:
            hook(self._rotation)

        while not self._stop_requested:
            start = time.monotonic()
            self._tick()
            if self._stop_requested:
                break
            sleep_time = self._dt - (time.monotonic() - start)
            if sleep_time > 0:
                time.sleep(sleep_time)

        for hook in self._stop_hooks:
            hook(self._rotation)
