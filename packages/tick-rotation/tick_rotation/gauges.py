"""Simulated Heat/Battery gauges.

The host does not expose the job gauge, so the values here are a model
driven purely by which abilities executed. The model can drift from the
real gauge (missed executions, deaths, downtime); hosts that can read the
true values should feed them back through ``GaugeTracker.reconcile``.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from tick_rotation.catalog import ABILITIES, BATTERY, GAUGE_MAX, HEAT
from tick_rotation.types import AbilityDef


@dataclass(frozen=True)
class GaugeDef:
    """Immutable gauge definition.

    Attributes:
        name: Gauge identifier ("heat" or "battery").
        maximum: Upper bound; values are clamped into [0, maximum].
    """

    name: str
    maximum: int = GAUGE_MAX

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("GaugeDef name must be non-empty")
        if self.maximum <= 0:
            raise ValueError(f"maximum must be > 0, got {self.maximum}")


GAUGES: tuple[GaugeDef, ...] = (GaugeDef(HEAT), GaugeDef(BATTERY))


class GaugeTracker:
    """Two bounded counters updated from executed abilities."""

    def __init__(
        self,
        effects: Mapping[int, AbilityDef] | None = None,
        gauges: tuple[GaugeDef, ...] = GAUGES,
    ) -> None:
        self._effects = ABILITIES if effects is None else effects
        self._definitions: dict[str, GaugeDef] = {g.name: g for g in gauges}
        self._values: dict[str, int] = {g.name: 0 for g in gauges}

    # --- Mutation ---

    def apply(self, ability_id: int) -> None:
        """Apply the static effect of one executed ability. Unknown ids do nothing."""
        defn = self._effects.get(ability_id)
        if defn is None:
            return
        self._add(HEAT, defn.heat)
        self._add(BATTERY, defn.battery)

    def reconcile(self, heat: int | None = None, battery: int | None = None) -> None:
        """Overwrite gauges with values read from the host."""
        if heat is not None:
            self._set(HEAT, heat)
        if battery is not None:
            self._set(BATTERY, battery)

    def reset(self) -> None:
        for name in self._values:
            self._values[name] = 0

    # --- Queries ---

    @property
    def heat(self) -> int:
        return self._values[HEAT]

    @property
    def battery(self) -> int:
        return self._values[BATTERY]

    def value(self, name: str) -> int:
        """Current value. Raises KeyError for unknown gauges."""
        return self._values[name]

    def maximum(self, name: str) -> int:
        """Gauge maximum. Raises KeyError for unknown gauges."""
        return self._definitions[name].maximum

    def is_capped(self, name: str) -> bool:
        return self._values[name] >= self._definitions[name].maximum

    # --- Internal helpers ---

    def _add(self, name: str, delta: int) -> None:
        if delta == 0 or name not in self._values:
            return
        self._set(name, self._values[name] + delta)

    def _set(self, name: str, value: int) -> None:
        maximum = self._definitions[name].maximum
        self._values[name] = max(0, min(maximum, value))

    # --- Serialization ---

    def snapshot(self) -> dict[str, Any]:
        return {"gauges": dict(self._values)}

    def restore(self, data: dict[str, Any]) -> None:
        """Restore gauge values. Unknown gauge names are skipped."""
        for name, value in data.get("gauges", {}).items():
            if name not in self._definitions:
                continue
            self._set(name, value)
