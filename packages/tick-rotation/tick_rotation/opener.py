"""Scripted opener sequencer."""
from __future__ import annotations

import logging
from enum import Enum
from typing import TYPE_CHECKING, Callable

from tick_rotation.catalog import OPENER
from tick_rotation.session import STATUS_OPENER_ACTIVE, STATUS_OPENER_COMPLETE

if TYPE_CHECKING:
    from tick_rotation.actions import ActionExecutor, TickFrame
    from tick_rotation.config import Tuning
    from tick_rotation.session import RotationSession
    from tick_rotation.types import OpenerStep

logger = logging.getLogger(__name__)


class OpenerOutcome(Enum):
    """Result of one ``OpenerSequencer.advance`` call."""

    COMPLETE = "complete"  # plan exhausted, opener mode left
    SKIPPED = "skipped"  # step disabled in configuration, cursor advanced
    BLOCKED = "blocked"  # timing gate closed
    UNAVAILABLE = "unavailable"  # not usable, or execute failed
    EXECUTED = "executed"


class OpenerSequencer:
    """Steps through a fixed opener plan, one step per tick at most.

    The plan is immutable; only the cursor in the session moves. Steps run
    strictly in order. The only skip is a step whose ability is disabled
    in configuration.
    """

    def __init__(
        self,
        session: RotationSession,
        executor: ActionExecutor,
        tuning: Tuning,
        plan: tuple[OpenerStep, ...] = OPENER,
        on_complete: Callable[[], None] | None = None,
    ) -> None:
        self._session = session
        self._executor = executor
        self._tuning = tuning
        self._plan = plan
        self._on_complete = on_complete

    @property
    def length(self) -> int:
        return len(self._plan)

    @property
    def exhausted(self) -> bool:
        return self._session.opener_step >= len(self._plan)

    def current(self) -> OpenerStep | None:
        """Step under the cursor, or None once the plan is exhausted."""
        if self.exhausted:
            return None
        return self._plan[self._session.opener_step]

    def preview(self) -> str | None:
        step = self.current()
        return f"[Opener] {step.label}" if step is not None else None

    def begin(self) -> None:
        session = self._session
        session.in_opener = True
        session.opener_step = 0
        session.combo_step = 0
        session.status = STATUS_OPENER_ACTIVE
        logger.info("Opener started (%d steps)", len(self._plan))

    def advance(self, frame: TickFrame) -> OpenerOutcome:
        session = self._session
        step = self.current()
        if step is None:
            session.in_opener = False
            session.next_action = ""
            session.status = STATUS_OPENER_COMPLETE
            logger.info("Opener completed, switching to rotation")
            if self._on_complete is not None:
                self._on_complete()
            return OpenerOutcome.COMPLETE

        if not self._executor.is_enabled(step.ability_id):
            logger.debug("Opener step %d (%s) disabled, skipping",
                         session.opener_step + 1, step.label)
            session.opener_step += 1
            return OpenerOutcome.SKIPPED

        session.next_action = step.label

        if self._gate_closed(step, frame.now):
            logger.debug("Opener step %d (%s) waiting on lockout",
                         session.opener_step + 1, step.label)
            return OpenerOutcome.BLOCKED

        if not self._executor.try_use(frame, step.ability_id, step.label, fast=step.fast):
            return OpenerOutcome.UNAVAILABLE

        session.opener_step += 1
        upcoming = self.current()
        session.next_action = upcoming.label if upcoming is not None else ""
        session.status = f"Opener {session.opener_step}/{len(self._plan)}"
        logger.info("Opener step %d: %s", session.opener_step, step.label)
        return OpenerOutcome.EXECUTED

    def _gate_closed(self, step: OpenerStep, now: float) -> bool:
        session = self._session
        if step.fast:
            return session.since_action(now) < self._tuning.ogcd_lockout
        return session.since_gcd(now) < self._tuning.gcd_lockout
