"""tick-rotation - Per-tick combat rotation engine (Machinist)."""
from tick_rotation.actions import ActionExecutor, TickFrame
from tick_rotation.clock import ManualClock, MonotonicClock
from tick_rotation.config import RotationSettings, Tuning
from tick_rotation.gauges import GaugeDef, GaugeTracker
from tick_rotation.host import RotationHost
from tick_rotation.logs import configure_logging
from tick_rotation.loop import TickLoop
from tick_rotation.opener import OpenerOutcome, OpenerSequencer
from tick_rotation.policy import HyperchargeReason, RotationPolicy
from tick_rotation.rotation import Rotation
from tick_rotation.session import RotationSession
from tick_rotation.sim import DEFAULT_RECASTS, SimAbility, SimulatedHost
from tick_rotation.types import (
    AbilityDef,
    Lane,
    OpenerStep,
    RotationSnapshot,
    TargetHandle,
)

__all__ = [
    "AbilityDef",
    "ActionExecutor",
    "DEFAULT_RECASTS",
    "GaugeDef",
    "GaugeTracker",
    "HyperchargeReason",
    "Lane",
    "ManualClock",
    "MonotonicClock",
    "OpenerOutcome",
    "OpenerSequencer",
    "OpenerStep",
    "Rotation",
    "RotationHost",
    "RotationPolicy",
    "RotationSession",
    "RotationSettings",
    "RotationSnapshot",
    "SimAbility",
    "SimulatedHost",
    "TargetHandle",
    "TickFrame",
    "TickLoop",
    "Tuning",
    "configure_logging",
]
