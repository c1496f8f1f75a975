"""Mutable runtime state of a rotation session."""
from __future__ import annotations

import math
from dataclasses import dataclass

NEVER = -math.inf

STATUS_IDLE = "Idle"
STATUS_RUNNING = "Running"
STATUS_OPENER_ACTIVE = "Opener Active"
STATUS_OPENER_COMPLETE = "Opener Complete - Running"
STATUS_NO_TARGET = "No Target"
STATUS_TARGET_DEAD = "Target Dead"
STATUS_STOPPED = "Stopped"

WAITING_FOR_TARGET = "Waiting for target..."


@dataclass
class RotationSession:
    """Everything the engine mutates between ticks.

    Timestamps are clock readings in seconds; ``NEVER`` means the event
    has not happened this session.
    """

    enabled: bool = False
    in_opener: bool = False
    opener_step: int = 0
    combo_step: int = 0
    burst_active: bool = False
    burst_stacks: int = 0
    last_gcd_at: float = NEVER
    last_action_at: float = NEVER
    last_wildfire_at: float = NEVER
    last_action: str = ""
    next_action: str = ""
    status: str = STATUS_IDLE

    def since_gcd(self, now: float) -> float:
        return now - self.last_gcd_at

    def since_action(self, now: float) -> float:
        return now - self.last_action_at

    def since_wildfire(self, now: float) -> float:
        return now - self.last_wildfire_at

    def open_burst(self, stacks: int) -> None:
        self.burst_active = True
        self.burst_stacks = stacks

    def clear_burst(self) -> None:
        self.burst_active = False
        self.burst_stacks = 0

    def reset_opener(self) -> None:
        """Clear opener, combo and burst state. Leaves ``enabled`` alone."""
        self.in_opener = False
        self.opener_step = 0
        self.combo_step = 0
        self.clear_burst()
        self.status = STATUS_RUNNING if self.enabled else STATUS_IDLE

    def reset_transient(self) -> None:
        """Return every transient field to its initial value and disable."""
        self.enabled = False
        self.in_opener = False
        self.opener_step = 0
        self.combo_step = 0
        self.clear_burst()
        self.last_gcd_at = NEVER
        self.last_action_at = NEVER
        self.last_wildfire_at = NEVER
        self.last_action = ""
        self.next_action = ""
        self.status = STATUS_STOPPED
