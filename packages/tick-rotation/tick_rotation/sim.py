"""SimulatedHost - an offline stand-in for the game client.

Tracks recast timers and charges per action the way the client reports
them, so the rotation can be exercised without a game. Times are in
seconds on the supplied clock.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from types import MappingProxyType
from typing import TYPE_CHECKING, Mapping

from tick_rotation.catalog import (
    AIR_ANCHOR,
    BARREL_STABILIZER,
    CHAIN_SAW,
    CHECKMATE,
    DOUBLE_CHECK,
    DRILL,
    EXCAVATOR,
    FULL_METAL_FIELD,
    GAUSS_ROUND,
    HYPERCHARGE,
    REASSEMBLE,
    RICOCHET,
    WILDFIRE,
    is_fast,
)
from tick_rotation.config import RotationSettings
from tick_rotation.types import TargetHandle

if TYPE_CHECKING:
    from tick_rotation.clock import ManualClock, MonotonicClock


@dataclass(frozen=True)
class SimAbility:
    """Recast data for one action.

    Attributes:
        cooldown: Seconds for one charge to come back (0 = no recast).
        max_charges: Charges held when fully recovered.
    """

    cooldown: float = 0.0
    max_charges: int = 1

    def __post_init__(self) -> None:
        if self.cooldown < 0:
            raise ValueError(f"cooldown must be >= 0, got {self.cooldown}")
        if self.max_charges < 1:
            raise ValueError(f"max_charges must be >= 1, got {self.max_charges}")


DEFAULT_RECASTS: Mapping[int, SimAbility] = MappingProxyType({
    DRILL: SimAbility(20.0, 2),
    AIR_ANCHOR: SimAbility(40.0),
    CHAIN_SAW: SimAbility(60.0),
    EXCAVATOR: SimAbility(60.0),
    FULL_METAL_FIELD: SimAbility(120.0),
    GAUSS_ROUND: SimAbility(30.0, 3),
    DOUBLE_CHECK: SimAbility(30.0, 3),
    RICOCHET: SimAbility(30.0, 3),
    CHECKMATE: SimAbility(30.0, 3),
    HYPERCHARGE: SimAbility(10.0),
    WILDFIRE: SimAbility(120.0),
    REASSEMBLE: SimAbility(55.0, 2),
    BARREL_STABILIZER: SimAbility(120.0),
})


@dataclass
class _RecastState:
    charges: int
    ready_at: float = math.inf  # when the next charge returns


@dataclass
class Execution:
    """One accepted execute call."""

    time: float
    ability_id: int
    target_id: int


class SimulatedHost:
    """In-memory implementation of ``RotationHost``.

    Actions missing from ``recasts`` are always usable. ``gcd`` is the
    shared recast of slow actions (0 disables it).
    """

    def __init__(
        self,
        clock: ManualClock | MonotonicClock,
        settings: RotationSettings | None = None,
        recasts: Mapping[int, SimAbility] | None = None,
        gcd: float = 0.0,
        target: TargetHandle | None = TargetHandle(id=1),
    ) -> None:
        self.clock = clock
        self.settings = settings if settings is not None else RotationSettings()
        self.target = target
        self.gcd = gcd
        self.history: list[Execution] = []
        self.attempts: list[int] = []
        self._recasts = dict(DEFAULT_RECASTS if recasts is None else recasts)
        self._states: dict[int, _RecastState] = {
            ability_id: _RecastState(charges=recast.max_charges)
            for ability_id, recast in self._recasts.items()
        }
        self._last_gcd_at = -math.inf
        self._blocked: set[int] = set()
        self._fail_next: set[int] = set()

    # --- RotationHost ---

    def now(self) -> float:
        return self.clock.now()

    def current_target(self) -> TargetHandle | None:
        return self.target

    def is_enabled_in_config(self, ability_id: int) -> bool:
        return self.settings.is_enabled(ability_id)

    def opener_enabled(self) -> bool:
        return self.settings.use_opener

    def is_usable(self, ability_id: int) -> bool:
        if ability_id in self._blocked:
            return False
        now = self.clock.now()
        if not is_fast(ability_id) and now - self._last_gcd_at < self.gcd:
            return False
        state = self._states.get(ability_id)
        if state is None:
            return True
        self._regen(ability_id, state, now)
        return state.charges > 0

    def execute(self, ability_id: int, target_id: int) -> bool:
        self.attempts.append(ability_id)
        target = self.target
        if target is None or not target.is_alive or target.id != target_id:
            return False
        if ability_id in self._fail_next:
            self._fail_next.discard(ability_id)
            return False
        if not self.is_usable(ability_id):
            return False

        now = self.clock.now()
        state = self._states.get(ability_id)
        if state is not None:
            self._consume(ability_id, state, now)
        if not is_fast(ability_id):
            self._last_gcd_at = now
        self.history.append(Execution(now, ability_id, target_id))
        return True

    # --- Test and demo controls ---

    def block(self, *ability_ids: int) -> None:
        """Report these actions as unusable until unblocked."""
        self._blocked.update(ability_ids)

    def unblock(self, *ability_ids: int) -> None:
        self._blocked.difference_update(ability_ids)

    def fail_next(self, ability_id: int) -> None:
        """The next execute of this action fails even though it is usable."""
        self._fail_next.add(ability_id)

    def executed_ids(self) -> list[int]:
        return [e.ability_id for e in self.history]

    def charges(self, ability_id: int) -> int:
        """Current charges. Raises KeyError for actions without recast data."""
        state = self._states[ability_id]
        self._regen(ability_id, state, self.clock.now())
        return state.charges

    def cooldown_remaining(self, ability_id: int) -> float:
        """Seconds until the next charge returns. 0 if fully charged."""
        state = self._states[ability_id]
        self._regen(ability_id, state, self.clock.now())
        if math.isinf(state.ready_at):
            return 0.0
        return max(0.0, state.ready_at - self.clock.now())

    # --- Internal helpers ---

    def _consume(self, ability_id: int, state: _RecastState, now: float) -> None:
        recast = self._recasts[ability_id]
        if recast.cooldown == 0:
            return
        state.charges -= 1
        if math.isinf(state.ready_at):
            state.ready_at = now + recast.cooldown

    def _regen(self, ability_id: int, state: _RecastState, now: float) -> None:
        recast = self._recasts[ability_id]
        while now >= state.ready_at:
            state.charges += 1
            if state.charges < recast.max_charges:
                state.ready_at += recast.cooldown
            else:
                state.ready_at = math.inf
