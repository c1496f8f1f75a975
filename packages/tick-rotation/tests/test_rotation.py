"""Tests for tick_rotation.rotation - lifecycle, targets and host-facing queries."""
from __future__ import annotations

import pytest

from tick_rotation.catalog import (
    AIR_ANCHOR,
    HEATED_CLEAN_SHOT,
    HEATED_SLUG_SHOT,
    HEATED_SPLIT_SHOT,
    OPENER,
    REASSEMBLE,
)
from tick_rotation.clock import ManualClock
from tick_rotation.config import RotationSettings
from tick_rotation.rotation import Rotation
from tick_rotation.sim import SimulatedHost
from tick_rotation.types import OpenerStep, TargetHandle


class _CountingHost(SimulatedHost):
    def __init__(self, clock: ManualClock) -> None:
        super().__init__(clock, recasts={})
        self.now_calls = 0

    def now(self) -> float:
        self.now_calls += 1
        return super().now()


@pytest.fixture
def clock() -> ManualClock:
    return ManualClock(10.0)


@pytest.fixture
def host(clock: ManualClock) -> SimulatedHost:
    return SimulatedHost(clock, recasts={})


class TestLifecycle:
    def test_initial_state(self, host: SimulatedHost) -> None:
        rotation = Rotation(host)
        snap = rotation.snapshot()
        assert not snap.enabled
        assert not snap.in_opener
        assert snap.status == "Idle"
        assert snap.preview == "Rotation disabled"
        assert snap.opener_length == len(OPENER)

    def test_disabled_tick_does_nothing(self, host: SimulatedHost) -> None:
        rotation = Rotation(host)
        assert rotation.tick() == ()
        assert host.attempts == []

    def test_start_enters_opener(self, host: SimulatedHost) -> None:
        rotation = Rotation(host)
        rotation.start()
        assert rotation.session.enabled
        assert rotation.session.in_opener
        assert rotation.session.status == "Opener Active"

    def test_start_without_opener(self, host: SimulatedHost) -> None:
        rotation = Rotation(host)
        rotation.start(with_opener=False)
        assert rotation.session.enabled
        assert not rotation.session.in_opener
        assert rotation.session.status == "Running"
        assert rotation.next_action_preview() == "Basic combo"

    def test_use_opener_default_is_respected(self, host: SimulatedHost) -> None:
        rotation = Rotation(host, use_opener=False)
        rotation.start()
        assert not rotation.session.in_opener

    def test_primary_button_is_idempotent(self, clock: ManualClock, host: SimulatedHost) -> None:
        rotation = Rotation(host)
        rotation.on_primary_button_pressed()
        rotation.tick()
        assert rotation.session.opener_step == 1

        rotation.on_primary_button_pressed()
        assert rotation.session.opener_step == 1
        assert rotation.session.in_opener

    def test_stop_resets_and_silences(self, clock: ManualClock, host: SimulatedHost) -> None:
        rotation = Rotation(host)
        rotation.start()
        rotation.tick()
        rotation.session.open_burst(5)

        rotation.stop()
        session = rotation.session
        assert not session.enabled
        assert not session.in_opener
        assert session.opener_step == 0
        assert session.combo_step == 0
        assert not session.burst_active
        assert session.burst_stacks == 0
        assert session.last_action == ""
        assert session.status == "Stopped"

        attempts = len(host.attempts)
        clock.advance(1.0)
        assert rotation.tick() == ()
        assert len(host.attempts) == attempts
        assert rotation.snapshot().status == "Stopped"

    def test_reset_opener_keeps_enabled(self, clock: ManualClock, host: SimulatedHost) -> None:
        rotation = Rotation(host)
        rotation.start()
        for _ in range(3):
            rotation.tick()
            clock.advance(1.0)
        assert rotation.session.opener_step == 3

        rotation.reset_opener()
        assert rotation.session.enabled
        assert not rotation.session.in_opener
        assert rotation.session.opener_step == 0
        assert rotation.session.combo_step == 0
        assert rotation.session.status == "Running"

    def test_reset_opener_when_idle(self, host: SimulatedHost) -> None:
        rotation = Rotation(host)
        rotation.reset_opener()
        assert not rotation.session.enabled
        assert rotation.session.status == "Idle"

    def test_restart_after_stop(self, clock: ManualClock, host: SimulatedHost) -> None:
        rotation = Rotation(host)
        rotation.start()
        rotation.tick()
        rotation.stop()
        rotation.on_primary_button_pressed()
        clock.advance(1.0)
        assert rotation.tick() == (REASSEMBLE,)


class TestTargets:
    def test_no_target(self, host: SimulatedHost) -> None:
        host.target = None
        rotation = Rotation(host)
        rotation.start()
        assert rotation.tick() == ()
        assert rotation.session.status == "No Target"
        assert rotation.session.next_action == "Waiting for target..."
        assert host.attempts == []

    def test_dead_target(self, host: SimulatedHost) -> None:
        host.target = TargetHandle(id=7, is_alive=False)
        rotation = Rotation(host)
        rotation.start()
        assert rotation.tick() == ()
        assert rotation.session.status == "Target Dead"
        assert rotation.session.next_action == "Waiting for target..."

    def test_waiting_placeholder_cleared_when_target_returns(
        self, clock: ManualClock
    ) -> None:
        host = SimulatedHost(clock, settings=RotationSettings.all_disabled(), recasts={})
        host.target = None
        rotation = Rotation(host, use_opener=False)
        rotation.start()
        rotation.tick()
        assert rotation.next_action_preview() == "Waiting for target..."

        host.target = TargetHandle(id=1)
        executed = []
        for _ in range(5):
            clock.advance(2.5)
            executed.extend(rotation.tick())
        assert executed == [
            HEATED_SPLIT_SHOT,
            HEATED_SLUG_SHOT,
            HEATED_CLEAN_SHOT,
            HEATED_SPLIT_SHOT,
            HEATED_SLUG_SHOT,
        ]
        assert rotation.session.next_action == "Heated Clean Shot"
        assert rotation.next_action_preview() == "Heated Clean Shot"
        assert rotation.session.status == "Running (Heat: 20)"

    def test_status_restored_before_spacing_allows_action(
        self, clock: ManualClock, host: SimulatedHost
    ) -> None:
        rotation = Rotation(host)
        rotation.start()
        rotation.tick()
        host.target = None
        rotation.tick()
        assert rotation.session.status == "No Target"

        host.target = TargetHandle(id=1)
        assert rotation.tick() == ()
        assert rotation.session.status == "Opener Active"
        assert rotation.next_action_preview() == "[Opener] Air Anchor"

    def test_resumes_when_target_returns(self, clock: ManualClock, host: SimulatedHost) -> None:
        host.target = None
        rotation = Rotation(host)
        rotation.start()
        rotation.tick()

        host.target = TargetHandle(id=7)
        clock.advance(1.0)
        assert rotation.tick() == (REASSEMBLE,)
        assert host.history[-1].target_id == 7


class TestSpacing:
    def test_min_spacing_before_any_decision(self, clock: ManualClock, host: SimulatedHost) -> None:
        plan = (
            OpenerStep(REASSEMBLE, True, "Reassemble"),
            OpenerStep(AIR_ANCHOR, False, "Air Anchor"),
        )
        rotation = Rotation(host, opener=plan)
        rotation.start()
        assert rotation.tick() == (REASSEMBLE,)

        clock.advance(0.0625)
        assert rotation.tick() == ()
        assert host.attempts == [REASSEMBLE]

        clock.advance(0.0625)
        assert rotation.tick() == (AIR_ANCHOR,)

    def test_clock_sampled_once_per_tick(self, clock: ManualClock) -> None:
        host = _CountingHost(clock)
        rotation = Rotation(host, use_opener=False)
        rotation.start()
        for _ in range(5):
            host.now_calls = 0
            rotation.tick()
            assert host.now_calls == 1
            clock.advance(0.75)


class TestQueries:
    def test_count_enabled_abilities(self, clock: ManualClock) -> None:
        host = SimulatedHost(clock, recasts={})
        rotation = Rotation(host)
        assert rotation.count_enabled_abilities() == 12

        host.settings = RotationSettings(use_drill=False, use_ricochet=False)
        assert rotation.count_enabled_abilities() == 10

        host.settings = RotationSettings.all_disabled()
        assert rotation.count_enabled_abilities() == 0

    def test_all_disabled_degrades_to_combo(self, clock: ManualClock) -> None:
        host = SimulatedHost(clock, settings=RotationSettings.all_disabled(), recasts={})
        rotation = Rotation(host, use_opener=False)
        rotation.start()
        assert rotation.tick() == (HEATED_SPLIT_SHOT,)

    def test_snapshot_reflects_gauges(self, host: SimulatedHost) -> None:
        rotation = Rotation(host)
        rotation.reconcile_gauges(heat=45, battery=80)
        snap = rotation.snapshot()
        assert snap.heat == 45
        assert snap.battery == 80

    def test_on_execute_callback(self, clock: ManualClock, host: SimulatedHost) -> None:
        seen: list[tuple[int, str]] = []
        rotation = Rotation(host, use_opener=False, on_execute=lambda a, n: seen.append((a, n)))
        rotation.start()
        rotation.tick()
        assert seen == [(REASSEMBLE, "Reassemble"), (AIR_ANCHOR, "Air Anchor")]

    def test_preview_after_opener_names_next_action(self, clock: ManualClock) -> None:
        host = SimulatedHost(clock, settings=RotationSettings.all_disabled(), recasts={})
        plan = (OpenerStep(HEATED_SPLIT_SHOT, False, "Heated Split Shot"),)
        rotation = Rotation(host, opener=plan)
        rotation.start()

        assert rotation.tick() == (HEATED_SPLIT_SHOT,)
        assert rotation.next_action_preview() == "Basic combo"

        clock.advance(1.0)
        rotation.tick()
        assert not rotation.session.in_opener
        assert rotation.next_action_preview() == "Basic combo"

        clock.advance(2.5)
        assert rotation.tick() == (HEATED_SLUG_SHOT,)
        snap = rotation.snapshot()
        assert snap.next_action == "Heated Clean Shot"
        assert snap.preview == "Heated Clean Shot"


class TestHostSettings:
    def test_opener_setting_read_on_button_press(self, clock: ManualClock) -> None:
        host = SimulatedHost(clock, settings=RotationSettings(use_opener=False), recasts={})
        rotation = Rotation(host)
        rotation.on_primary_button_pressed()
        assert rotation.session.enabled
        assert not rotation.session.in_opener
        assert rotation.session.status == "Running"

    def test_opener_setting_read_at_each_start(self, clock: ManualClock) -> None:
        host = SimulatedHost(clock, recasts={})
        rotation = Rotation(host)
        rotation.start()
        assert rotation.session.in_opener

        rotation.stop()
        host.settings = RotationSettings(use_opener=False)
        rotation.start()
        assert not rotation.session.in_opener

    def test_constructor_choice_overrides_host(self, clock: ManualClock) -> None:
        host = SimulatedHost(clock, settings=RotationSettings(use_opener=False), recasts={})
        rotation = Rotation(host, use_opener=True)
        rotation.start()
        assert rotation.session.in_opener
