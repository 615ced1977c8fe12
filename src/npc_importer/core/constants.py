"""Constants shared by the extractors, converter and importer.

Defaults here are what the text extractors fall back to when a free-text
field has no recognizable structure.
"""

from __future__ import annotations

# =============================================================================
# Target Schema
# =============================================================================

SYSTEM_ID = "n5eb"
"""Identifier of the target game system."""

ACTOR_KIND = "npc"
"""Document type of every imported actor."""

DEFAULT_ABILITY_PROFICIENCY = 0.5
"""Proficiency multiplier written on every ability score (n5eb uses 0.5, 1, 2)."""

WORKING_SET_ORIGIN = "working-set"
"""Origin recorded for items reused from the live working set."""

CREATED_ORIGIN = "created"
"""Origin recorded for synthesized items."""

# =============================================================================
# Free-Text Defaults
# =============================================================================

PLACEHOLDER_ABILITY_NAME = "Special Ability"
"""Name given to a free-text ability that has no ``Name:`` prefix."""

SHAPE_DEFAULT_DISTANCES = {
    "cone": 15,
    "line": 30,
    "radius": 20,
    "cube": 10,
}
"""Area size in feet when an effect names a shape without a measurement."""

SELF_RANGE_FT = 0
TOUCH_RANGE_FT = 5
UNPARSED_RANGE_FT = 30
"""Range used when a range text is present but carries no number."""

MELEE_RANGE_FT = 5
"""Normal range of a weapon without a thrown/range tag."""

FALLBACK_WEAPON_DAMAGE = ("1d4", "piercing")
"""Damage part used when a weapon's damage text has no dice expression."""

RANK_LEVELS = {
    "E": 0,
    "D": 1,
    "C": 3,
    "B": 5,
    "A": 7,
    "S": 9,
}
"""Jutsu rank letter to spell level."""

DEFAULT_JUTSU_LEVEL = 1

NATURE_SCHOOLS = {
    "fire": "evo",
    "water": "trs",
    "wind": "evo",
    "earth": "abj",
    "lightning": "evo",
}
"""Chakra nature to spell school."""

DEFAULT_SCHOOL = "evo"


__all__ = [
    # Target schema
    "SYSTEM_ID",
    "ACTOR_KIND",
    "DEFAULT_ABILITY_PROFICIENCY",
    "WORKING_SET_ORIGIN",
    "CREATED_ORIGIN",
    # Free-text defaults
    "PLACEHOLDER_ABILITY_NAME",
    "SHAPE_DEFAULT_DISTANCES",
    "SELF_RANGE_FT",
    "TOUCH_RANGE_FT",
    "UNPARSED_RANGE_FT",
    "MELEE_RANGE_FT",
    "FALLBACK_WEAPON_DAMAGE",
    "RANK_LEVELS",
    "DEFAULT_JUTSU_LEVEL",
    "NATURE_SCHOOLS",
    "DEFAULT_SCHOOL",
]
