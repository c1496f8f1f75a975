"""Rotation - per-tick entry point and session lifecycle."""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable

from tick_rotation.actions import ActionExecutor, ExecuteCallback, TickFrame
from tick_rotation.catalog import CATEGORIES, OPENER
from tick_rotation.config import Tuning
from tick_rotation.gauges import GaugeTracker
from tick_rotation.opener import OpenerSequencer
from tick_rotation.policy import RotationPolicy
from tick_rotation.session import (
    STATUS_NO_TARGET,
    STATUS_OPENER_ACTIVE,
    STATUS_RUNNING,
    STATUS_TARGET_DEAD,
    WAITING_FOR_TARGET,
    RotationSession,
)
from tick_rotation.types import RotationSnapshot

if TYPE_CHECKING:
    from tick_rotation.host import RotationHost
    from tick_rotation.types import OpenerStep

logger = logging.getLogger(__name__)


class Rotation:
    """Drives one rotation session against a host.

    ``tick`` must be called from a single thread, never re-entered, and
    never blocks. The session is only mutated from ``tick`` and the
    lifecycle commands.
    """

    def __init__(
        self,
        host: RotationHost,
        *,
        tuning: Tuning | None = None,
        opener: tuple[OpenerStep, ...] = OPENER,
        use_opener: bool | None = None,
        on_execute: ExecuteCallback | None = None,
        on_opener_complete: Callable[[], None] | None = None,
    ) -> None:
        self._host = host
        self._tuning = tuning if tuning is not None else Tuning()
        self.use_opener = use_opener
        self._session = RotationSession()
        self._gauges = GaugeTracker(effects=self._tuning.effects())
        self._executor = ActionExecutor(host, self._session, self._gauges, on_execute)
        self._opener = OpenerSequencer(
            self._session, self._executor, self._tuning, opener, on_opener_complete
        )
        self._policy = RotationPolicy(
            self._session, self._executor, self._gauges, self._tuning
        )

    @property
    def session(self) -> RotationSession:
        return self._session

    @property
    def gauges(self) -> GaugeTracker:
        return self._gauges

    @property
    def tuning(self) -> Tuning:
        return self._tuning

    @property
    def policy(self) -> RotationPolicy:
        return self._policy

    @property
    def opener(self) -> OpenerSequencer:
        return self._opener

    # --- Lifecycle ---

    def start(self, with_opener: bool | None = None) -> None:
        """Enable the rotation, entering the opener unless told otherwise.

        Without an explicit choice the constructor's ``use_opener`` wins,
        then the host's opener setting.
        """
        if with_opener is None:
            with_opener = self.use_opener
        if with_opener is None:
            with_opener = self._host.opener_enabled()
        self._session.enabled = True
        if with_opener:
            self._opener.begin()
        else:
            self._session.status = STATUS_RUNNING
        logger.info("Rotation started (opener: %s)", with_opener)

    def stop(self) -> None:
        self._session.reset_transient()
        logger.info("Rotation stopped")

    def reset_opener(self) -> None:
        self._session.reset_opener()

    def on_primary_button_pressed(self) -> None:
        """Start the rotation if it is not running. No-op otherwise."""
        if self._session.enabled:
            return
        self.start()
        logger.info("Rotation started via combo button press")

    def reconcile_gauges(self, heat: int | None = None, battery: int | None = None) -> None:
        """Replace modelled gauge values with host readings."""
        self._gauges.reconcile(heat=heat, battery=battery)

    # --- Tick ---

    def tick(self) -> tuple[int, ...]:
        """Evaluate one tick. Returns the ability ids executed, in order."""
        session = self._session
        if not session.enabled:
            return ()

        now = self._host.now()

        target = self._host.current_target()
        if target is None:
            session.status = STATUS_NO_TARGET
            session.next_action = WAITING_FOR_TARGET
            return ()
        if not target.is_alive:
            session.status = STATUS_TARGET_DEAD
            session.next_action = WAITING_FOR_TARGET
            return ()
        if session.next_action == WAITING_FOR_TARGET:
            session.next_action = ""
            session.status = STATUS_OPENER_ACTIVE if session.in_opener else STATUS_RUNNING

        if session.since_action(now) < self._tuning.min_action_spacing:
            return ()

        frame = TickFrame(now=now, target_id=target.id)
        if session.in_opener:
            self._opener.advance(frame)
        else:
            self._policy.evaluate(frame)
        if not frame.acted:
            logger.debug("Nothing executed at %.2f (%s)", now, session.status)
        return tuple(frame.executed)

    # --- Queries ---

    def next_action_preview(self) -> str:
        session = self._session
        if not session.enabled:
            return "Rotation disabled"
        if session.in_opener:
            preview = self._opener.preview()
            if preview is not None:
                return preview
        return session.next_action or "Basic combo"

    def count_enabled_abilities(self) -> int:
        """Number of optional categories the host currently has enabled."""
        return sum(
            1 for ids in CATEGORIES.values() if self._host.is_enabled_in_config(ids[0])
        )

    def snapshot(self) -> RotationSnapshot:
        session = self._session
        return RotationSnapshot(
            enabled=session.enabled,
            in_opener=session.in_opener,
            opener_step=session.opener_step,
            opener_length=self._opener.length,
            combo_step=session.combo_step,
            last_action=session.last_action,
            next_action=session.next_action,
            status=session.status,
            heat=self._gauges.heat,
            battery=self._gauges.battery,
            burst_active=session.burst_active,
            burst_stacks=session.burst_stacks,
            preview=self.next_action_preview(),
        )
