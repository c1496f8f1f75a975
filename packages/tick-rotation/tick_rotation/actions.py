"""Shared execute-and-record path used by the opener and the policy."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable

from tick_rotation.catalog import ABILITIES, COMBO_NEXT, WILDFIRE, is_fast

if TYPE_CHECKING:
    from tick_rotation.gauges import GaugeTracker
    from tick_rotation.host import RotationHost
    from tick_rotation.session import RotationSession

logger = logging.getLogger(__name__)

ExecuteCallback = Callable[[int, str], None]


@dataclass
class TickFrame:
    """Per-tick context. ``now`` is sampled once and reused for every gate.

    Attributes:
        now: Clock reading taken at the start of the tick.
        target_id: Target every execution in this tick is issued against.
        executed: Action ids that executed this tick, in order.
        companions: Subset of ``executed`` fired as companion weaves.
    """

    now: float
    target_id: int
    executed: list[int] = field(default_factory=list)
    companions: list[int] = field(default_factory=list)

    @property
    def acted(self) -> bool:
        """True once a non-companion ability executed this tick."""
        return len(self.executed) > len(self.companions)


class ActionExecutor:
    """Issues host executions and records their side effects exactly once."""

    def __init__(
        self,
        host: RotationHost,
        session: RotationSession,
        gauges: GaugeTracker,
        on_execute: ExecuteCallback | None = None,
    ) -> None:
        self._host = host
        self._session = session
        self._gauges = gauges
        self._on_execute = on_execute

    def is_enabled(self, ability_id: int) -> bool:
        return self._host.is_enabled_in_config(ability_id)

    def is_ready(self, ability_id: int) -> bool:
        """Enabled in configuration and usable right now."""
        return self._host.is_enabled_in_config(ability_id) and self._host.is_usable(
            ability_id
        )

    def try_use(
        self,
        frame: TickFrame,
        ability_id: int,
        label: str | None = None,
        *,
        fast: bool | None = None,
        companion: bool = False,
    ) -> bool:
        """Attempt one execution. Returns True if the host applied it.

        ``fast`` overrides the catalog lane; opener steps carry their own.
        Unusable abilities and failed executions leave all state untouched.
        """
        if not self._host.is_usable(ability_id):
            return False
        if not self._host.execute(ability_id, frame.target_id):
            logger.debug("Execute failed for %s", ability_id)
            return False

        if label is None:
            defn = ABILITIES.get(ability_id)
            label = defn.name if defn is not None else str(ability_id)
        if fast is None:
            fast = is_fast(ability_id)
        self._record(frame, ability_id, label, fast)
        frame.executed.append(ability_id)
        if companion:
            frame.companions.append(ability_id)
        if self._on_execute is not None:
            self._on_execute(ability_id, label)
        return True

    def _record(
        self, frame: TickFrame, ability_id: int, label: str, fast: bool
    ) -> None:
        session = self._session
        session.last_action = label
        session.last_action_at = frame.now
        if not fast:
            session.last_gcd_at = frame.now
        if ability_id == WILDFIRE:
            session.last_wildfire_at = frame.now

        self._gauges.apply(ability_id)
        session.combo_step = COMBO_NEXT.get(ability_id, session.combo_step)
        logger.info("Used %s (Heat: %d)", label, self._gauges.heat)
