"""Machinist reference data: action ids, gauge effects, opener and priorities.

Everything here is immutable and keyed by action id, so adding or removing
an ability is a data change.
"""
from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

from tick_rotation.types import AbilityDef, Lane, OpenerStep

# --- Action ids ---

HEATED_SPLIT_SHOT = 7411
HEATED_SLUG_SHOT = 7412
HEATED_CLEAN_SHOT = 7413
DRILL = 16498
AIR_ANCHOR = 16500
CHAIN_SAW = 25788
EXCAVATOR = 36981
FULL_METAL_FIELD = 36982
GAUSS_ROUND = 2874
RICOCHET = 2890
DOUBLE_CHECK = 36979
CHECKMATE = 36980
HYPERCHARGE = 17209
HEAT_BLAST = 7410
BLAZING_SHOT = 36978
WILDFIRE = 2878
REASSEMBLE = 2876
BARREL_STABILIZER = 7414

# --- Gauges ---

HEAT = "heat"
BATTERY = "battery"
GAUGE_MAX = 100

# Per combo GCD
HEAT_PER_COMBO = 5


def _table(*defs: AbilityDef) -> Mapping[int, AbilityDef]:
    return MappingProxyType({d.id: d for d in defs})


ABILITIES: Mapping[int, AbilityDef] = _table(
    AbilityDef(HEATED_SPLIT_SHOT, "Heated Split Shot", Lane.SLOW, heat=HEAT_PER_COMBO),
    AbilityDef(HEATED_SLUG_SHOT, "Heated Slug Shot", Lane.SLOW, heat=HEAT_PER_COMBO),
    AbilityDef(
        HEATED_CLEAN_SHOT, "Heated Clean Shot", Lane.SLOW,
        heat=HEAT_PER_COMBO, battery=10,
    ),
    AbilityDef(DRILL, "Drill", Lane.SLOW),
    AbilityDef(AIR_ANCHOR, "Air Anchor", Lane.SLOW, battery=20),
    AbilityDef(CHAIN_SAW, "Chain Saw", Lane.SLOW, battery=20),
    AbilityDef(EXCAVATOR, "Excavator", Lane.SLOW),
    AbilityDef(FULL_METAL_FIELD, "Full Metal Field", Lane.SLOW),
    AbilityDef(HEAT_BLAST, "Heat Blast", Lane.SLOW),
    AbilityDef(BLAZING_SHOT, "Blazing Shot", Lane.SLOW),
    AbilityDef(GAUSS_ROUND, "Gauss Round", Lane.FAST),
    AbilityDef(RICOCHET, "Ricochet", Lane.FAST),
    AbilityDef(DOUBLE_CHECK, "Double Check", Lane.FAST),
    AbilityDef(CHECKMATE, "Checkmate", Lane.FAST),
    AbilityDef(HYPERCHARGE, "Hypercharge", Lane.FAST, heat=-50),
    AbilityDef(WILDFIRE, "Wildfire", Lane.FAST),
    AbilityDef(REASSEMBLE, "Reassemble", Lane.FAST),
    AbilityDef(BARREL_STABILIZER, "Barrel Stabilizer", Lane.FAST, heat=50),
)


def ability_name(ability_id: int) -> str:
    """Display name for an action id, falling back to the raw id."""
    defn = ABILITIES.get(ability_id)
    return defn.name if defn is not None else f"Action {ability_id}"


def is_fast(ability_id: int) -> bool:
    """Unknown ids are treated as slow actions."""
    defn = ABILITIES.get(ability_id)
    return defn is not None and defn.is_fast


# --- Opener (level 100 standard) ---


def _step(ability_id: int, label: str | None = None) -> OpenerStep:
    return OpenerStep(ability_id, is_fast(ability_id), label or ability_name(ability_id))


OPENER: tuple[OpenerStep, ...] = (
    _step(REASSEMBLE),
    _step(AIR_ANCHOR),
    _step(GAUSS_ROUND),
    _step(RICOCHET),
    _step(DRILL),
    _step(BARREL_STABILIZER),
    _step(GAUSS_ROUND),
    _step(HEATED_SPLIT_SHOT),
    _step(RICOCHET),
    _step(HEATED_SLUG_SHOT),
    _step(GAUSS_ROUND),
    _step(HEATED_CLEAN_SHOT),
    _step(RICOCHET),
    _step(REASSEMBLE),
    _step(CHAIN_SAW),
    _step(EXCAVATOR),
    _step(FULL_METAL_FIELD),
    _step(GAUSS_ROUND),
    _step(RICOCHET),
    _step(HYPERCHARGE),
    _step(HEAT_BLAST, "Heat Blast 1"),
    _step(WILDFIRE),
    _step(HEAT_BLAST, "Heat Blast 2"),
    _step(GAUSS_ROUND),
    _step(HEAT_BLAST, "Heat Blast 3"),
    _step(RICOCHET),
    _step(HEAT_BLAST, "Heat Blast 4"),
    _step(GAUSS_ROUND),
    _step(HEAT_BLAST, "Heat Blast 5"),
    _step(RICOCHET),
    _step(DRILL),
)

# --- Steady-state priorities ---

COMBO: tuple[int, int, int] = (HEATED_SPLIT_SHOT, HEATED_SLUG_SHOT, HEATED_CLEAN_SHOT)

# Combo cursor after each combo action executes
COMBO_NEXT: Mapping[int, int] = MappingProxyType({
    HEATED_SPLIT_SHOT: 1,
    HEATED_SLUG_SHOT: 2,
    HEATED_CLEAN_SHOT: 0,
})

# (action id, Reassemble may precede it). Tools only take Reassemble.
BURST_PRIORITY: tuple[tuple[int, bool], ...] = (
    (AIR_ANCHOR, True),
    (DRILL, True),
    (CHAIN_SAW, True),
    (EXCAVATOR, False),
    (FULL_METAL_FIELD, False),
)

# (primary, alternate) per charge-based oGCD category
FAST_PAIRS: tuple[tuple[int, int], ...] = (
    (GAUSS_ROUND, DOUBLE_CHECK),
    (RICOCHET, CHECKMATE),
)

# --- Configurable categories (setting name -> action ids) ---

CATEGORIES: Mapping[str, tuple[int, ...]] = MappingProxyType({
    "drill": (DRILL,),
    "air_anchor": (AIR_ANCHOR,),
    "chain_saw": (CHAIN_SAW,),
    "excavator": (EXCAVATOR,),
    "full_metal_field": (FULL_METAL_FIELD,),
    "reassemble": (REASSEMBLE,),
    "barrel_stabilizer": (BARREL_STABILIZER,),
    "hypercharge": (HYPERCHARGE,),
    "heat_blast": (HEAT_BLAST, BLAZING_SHOT),
    "wildfire": (WILDFIRE,),
    "gauss_round": (GAUSS_ROUND, DOUBLE_CHECK),
    "ricochet": (RICOCHET, CHECKMATE),
})

_CATEGORY_BY_ID: Mapping[int, str] = MappingProxyType({
    ability_id: category
    for category, ids in CATEGORIES.items()
    for ability_id in ids
})


def category_of(ability_id: int) -> str | None:
    """Setting category for an action id. None means always enabled."""
    return _CATEGORY_BY_ID.get(ability_id)
