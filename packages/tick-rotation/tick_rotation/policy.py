"""Steady-state priority cascade.

One call to ``RotationPolicy.evaluate`` per tick, once the opener is done.
Attempts run in a fixed order and the first successful execution ends
the tick:

1. weave window: fast actions between slow ones
2. slow-lane lockout
3. Heat Blast while a Hypercharge window is open
4. burst tools (with a Reassemble companion)
5. basic combo
"""
from __future__ import annotations

import logging
from enum import Enum
from typing import TYPE_CHECKING

from tick_rotation.catalog import (
    BARREL_STABILIZER,
    BURST_PRIORITY,
    COMBO,
    FAST_PAIRS,
    HEAT,
    HEAT_BLAST,
    HYPERCHARGE,
    REASSEMBLE,
    WILDFIRE,
    ability_name,
)

if TYPE_CHECKING:
    from tick_rotation.actions import ActionExecutor, TickFrame
    from tick_rotation.config import Tuning
    from tick_rotation.gauges import GaugeTracker
    from tick_rotation.session import RotationSession

logger = logging.getLogger(__name__)


class HyperchargeReason(Enum):
    """Why Hypercharge was chosen this weave."""

    OVERCAP = "overcap"  # Heat at max, any further gain is wasted
    RESERVE = "reserve"  # line up with a ready or imminent Wildfire
    SPEND = "spend"  # surplus Heat, Wildfire not imminent


class RotationPolicy:
    def __init__(
        self,
        session: RotationSession,
        executor: ActionExecutor,
        gauges: GaugeTracker,
        tuning: Tuning,
    ) -> None:
        self._session = session
        self._executor = executor
        self._gauges = gauges
        self._tuning = tuning

    def evaluate(self, frame: TickFrame) -> bool:
        """Run the cascade once. Returns True if an ability executed."""
        session = self._session
        session.status = f"Running (Heat: {self._gauges.heat})"
        acted = self._cascade(frame)
        session.next_action = self.upcoming()
        return acted

    def upcoming(self) -> str:
        """Label of the slow action the cascade would pick next.

        Best effort: usability is read as of now, so a tool still on the
        shared recast shows up only once it is ready.
        """
        session = self._session
        executor = self._executor
        if (
            session.burst_active
            and session.burst_stacks > 0
            and executor.is_enabled(HEAT_BLAST)
        ):
            return ability_name(HEAT_BLAST)
        for ability_id, _ in BURST_PRIORITY:
            if executor.is_ready(ability_id):
                return ability_name(ability_id)
        step = session.combo_step if 0 <= session.combo_step < len(COMBO) else 0
        return ability_name(COMBO[step])

    def _cascade(self, frame: TickFrame) -> bool:
        session = self._session
        if self.in_weave_window(frame.now) and self._weave(frame):
            return True

        if session.since_gcd(frame.now) < self._tuning.gcd_lockout:
            return False

        if self._continue_burst(frame):
            return True
        if self._burst_gcd(frame):
            return True
        return self._combo(frame)

    # --- Gates ---

    def in_weave_window(self, now: float) -> bool:
        tuning = self._tuning
        since_gcd = self._session.since_gcd(now)
        return (
            tuning.gcd_lockout <= since_gcd < tuning.weave_window_end
            and self._session.since_action(now) >= tuning.ogcd_lockout
        )

    def wildfire_imminent(self, now: float) -> bool:
        """Wildfire comes back within the look-ahead window."""
        tuning = self._tuning
        since = self._session.since_wildfire(now)
        window_start = tuning.wildfire_cooldown - tuning.wildfire_lookahead
        return window_start <= since < tuning.wildfire_cooldown

    def hypercharge_reason(self, now: float) -> HyperchargeReason | None:
        """Decide whether Hypercharge should fire now. None means hold it."""
        if self._session.burst_active or not self._executor.is_ready(HYPERCHARGE):
            return None

        if self._gauges.is_capped(HEAT):
            return HyperchargeReason.OVERCAP

        heat = self._gauges.heat
        tuning = self._tuning
        if self._executor.is_ready(WILDFIRE) or self.wildfire_imminent(now):
            return HyperchargeReason.RESERVE if heat >= tuning.hypercharge_cost else None
        if heat >= tuning.hypercharge_cost or heat >= tuning.overcap_soft_threshold:
            return HyperchargeReason.SPEND
        return None

    # --- Weave cascade ---

    def _weave(self, frame: TickFrame) -> bool:
        executor = self._executor
        reason = self.hypercharge_reason(frame.now)

        # At cap nothing goes ahead of Hypercharge
        if reason is HyperchargeReason.OVERCAP:
            return self._hypercharge(frame, reason) or self._weave_rest(frame)

        # Free Heat, use on cooldown
        if executor.is_enabled(BARREL_STABILIZER) and executor.try_use(
            frame, BARREL_STABILIZER
        ):
            return True

        if reason is not None and self._hypercharge(frame, reason):
            return True
        return self._weave_rest(frame)

    def _hypercharge(self, frame: TickFrame, reason: HyperchargeReason) -> bool:
        if not self._executor.try_use(frame, HYPERCHARGE):
            return False
        self._session.open_burst(self._tuning.hypercharge_stacks)
        logger.info("Hypercharge (%s), Heat now %d", reason.value, self._gauges.heat)
        return True

    def _weave_rest(self, frame: TickFrame) -> bool:
        executor = self._executor
        session = self._session

        # Wildfire only inside the Hypercharge window
        if (
            session.burst_active
            and executor.is_enabled(WILDFIRE)
            and executor.try_use(frame, WILDFIRE)
        ):
            return True

        for primary, alternate in FAST_PAIRS:
            if not executor.is_enabled(primary):
                continue
            if executor.try_use(frame, primary) or executor.try_use(frame, alternate):
                return True
        return False

    # --- Slow lane ---

    def _continue_burst(self, frame: TickFrame) -> bool:
        session = self._session
        if not session.burst_active:
            return False
        if session.burst_stacks <= 0 or not self._executor.is_enabled(HEAT_BLAST):
            # Nothing can spend the window
            logger.debug("Closing Hypercharge window with %d stacks", session.burst_stacks)
            session.clear_burst()
            return False

        if not self._executor.try_use(frame, HEAT_BLAST):
            return False
        session.burst_stacks -= 1
        if session.burst_stacks <= 0:
            session.clear_burst()
        return True

    def _burst_gcd(self, frame: TickFrame) -> bool:
        executor = self._executor
        reassembled = False
        for ability_id, takes_reassemble in BURST_PRIORITY:
            if not executor.is_ready(ability_id):
                continue
            if takes_reassemble and not reassembled and executor.is_ready(REASSEMBLE):
                reassembled = executor.try_use(frame, REASSEMBLE, companion=True)
            if executor.try_use(frame, ability_id):
                return True
        return False

    def _combo(self, frame: TickFrame) -> bool:
        session = self._session
        if not 0 <= session.combo_step < len(COMBO):
            session.combo_step = 0

        if self._executor.try_use(frame, COMBO[session.combo_step]):
            return True

        # Combo broken: retry the first step once
        if session.combo_step != 0:
            session.combo_step = 0
            return self._executor.try_use(frame, COMBO[0])
        return False
