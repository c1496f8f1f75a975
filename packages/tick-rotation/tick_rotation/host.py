"""Interface the rotation consumes from the game client."""
from __future__ import annotations

from typing import Protocol

from tick_rotation.types import TargetHandle


class RotationHost(Protocol):
    """Capabilities the host provides. All calls are synchronous.

    ``is_usable`` already folds in cooldown, resource and range checks.
    ``now`` must be monotonic and measured in seconds. ``opener_enabled``
    is the host's opener toggle, read each time the rotation starts.
    """

    def is_usable(self, ability_id: int) -> bool: ...

    def execute(self, ability_id: int, target_id: int) -> bool: ...

    def current_target(self) -> TargetHandle | None: ...

    def is_enabled_in_config(self, ability_id: int) -> bool: ...

    def opener_enabled(self) -> bool: ...

    def now(self) -> float: ...
