"""Tuning constants and host-supplied rotation settings."""
from __future__ import annotations

from dataclasses import dataclass, fields, replace
from types import MappingProxyType
from typing import Any, Mapping

from tick_rotation.catalog import ABILITIES, CATEGORIES, HYPERCHARGE, category_of
from tick_rotation.types import AbilityDef


@dataclass(frozen=True)
class Tuning:
    """Timing and gauge thresholds used by the sequencer and policy.

    The overcap/reserve numbers are game-specific tuning carried over
    as-is. Times are in seconds.

    Attributes:
        gcd_lockout: Minimum time between slow actions.
        ogcd_lockout: Minimum time between a fast action and any action.
        weave_window_end: Weaving stops this long after the last slow action.
        min_action_spacing: Global spacing checked before any decision.
        hypercharge_cost: Heat consumed by Hypercharge.
        hypercharge_stacks: Heat Blast uses granted per Hypercharge.
        overcap_soft_threshold: Heat that spends Hypercharge away from Wildfire
            even when below ``hypercharge_cost``.
        wildfire_cooldown: Wildfire recast.
        wildfire_lookahead: Wildfire counts as imminent this long before it returns.
    """

    gcd_lockout: float = 0.6
    ogcd_lockout: float = 0.6
    weave_window_end: float = 2.0
    min_action_spacing: float = 0.1
    hypercharge_cost: int = 50
    hypercharge_stacks: int = 5
    overcap_soft_threshold: int = 95
    wildfire_cooldown: float = 120.0
    wildfire_lookahead: float = 15.0

    def __post_init__(self) -> None:
        for f in fields(self):
            value = getattr(self, f.name)
            if value < 0:
                raise ValueError(f"{f.name} must be >= 0, got {value}")
        if self.weave_window_end <= self.gcd_lockout:
            raise ValueError(
                f"weave_window_end ({self.weave_window_end}) must be greater "
                f"than gcd_lockout ({self.gcd_lockout})"
            )
        if self.wildfire_lookahead > self.wildfire_cooldown:
            raise ValueError(
                f"wildfire_lookahead ({self.wildfire_lookahead}) must not exceed "
                f"wildfire_cooldown ({self.wildfire_cooldown})"
            )

    def effects(self) -> Mapping[int, AbilityDef]:
        """Gauge effect table with Hypercharge costing ``hypercharge_cost`` Heat."""
        table = dict(ABILITIES)
        table[HYPERCHARGE] = replace(table[HYPERCHARGE], heat=-self.hypercharge_cost)
        return MappingProxyType(table)


@dataclass
class RotationSettings:
    """Flat per-category toggles, as the host stores them.

    The basic combo has no toggle and is always enabled.
    """

    use_opener: bool = True
    use_drill: bool = True
    use_air_anchor: bool = True
    use_chain_saw: bool = True
    use_excavator: bool = True
    use_full_metal_field: bool = True
    use_reassemble: bool = True
    use_barrel_stabilizer: bool = True
    use_hypercharge: bool = True
    use_heat_blast: bool = True
    use_wildfire: bool = True
    use_gauss_round: bool = True
    use_ricochet: bool = True

    def category_enabled(self, category: str) -> bool:
        """Raises KeyError for unknown categories."""
        if category not in CATEGORIES:
            raise KeyError(category)
        return bool(getattr(self, f"use_{category}"))

    def is_enabled(self, ability_id: int) -> bool:
        category = category_of(ability_id)
        if category is None:
            return True
        return self.category_enabled(category)

    def enabled_count(self) -> int:
        """Number of enabled optional categories (opener excluded)."""
        return sum(1 for category in CATEGORIES if self.category_enabled(category))

    def to_dict(self) -> dict[str, bool]:
        return {f.name: getattr(self, f.name) for f in fields(self)}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> RotationSettings:
        """Build settings from a flat name -> bool map. Missing keys keep defaults."""
        known = {f.name for f in fields(cls)}
        for key, value in data.items():
            if key not in known:
                raise KeyError(key)
            if not isinstance(value, bool):
                raise TypeError(f"{key} must be a bool, got {type(value).__name__}")
        return cls(**data)

    @classmethod
    def all_disabled(cls) -> RotationSettings:
        """Every optional category off. The opener toggle is left on."""
        return cls(**{f"use_{category}": False for category in CATEGORIES})
