"""Core data types for the rotation engine."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Lane(Enum):
    """Timing lane an ability occupies."""

    SLOW = "slow"  # GCD: occupies the primary lane
    FAST = "fast"  # oGCD: woven between slow actions


@dataclass(frozen=True)
class AbilityDef:
    """Immutable ability reference data.

    Attributes:
        id: Stable numeric action id used by the host.
        name: Display label.
        lane: Slow (GCD) or fast (oGCD).
        heat: Heat delta applied when the ability executes.
        battery: Battery delta applied when the ability executes.
    """

    id: int
    name: str
    lane: Lane
    heat: int = 0
    battery: int = 0

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("AbilityDef name must be non-empty")
        if self.id <= 0:
            raise ValueError(f"id must be positive, got {self.id}")

    @property
    def is_fast(self) -> bool:
        return self.lane is Lane.FAST


@dataclass(frozen=True)
class OpenerStep:
    """One scripted opener step."""

    ability_id: int
    fast: bool
    label: str


@dataclass(frozen=True)
class TargetHandle:
    """Live target reference handed over by the host."""

    id: int
    is_alive: bool = True


@dataclass(frozen=True)
class RotationSnapshot:
    """Read-only view of the rotation for display."""

    enabled: bool
    in_opener: bool
    opener_step: int
    opener_length: int
    combo_step: int
    last_action: str
    next_action: str
    status: str
    heat: int
    battery: int
    burst_active: bool
    burst_stacks: int
    preview: str
