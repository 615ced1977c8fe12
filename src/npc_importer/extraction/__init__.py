"""Heuristic text-to-structure extractors for jutsu and weapon records.

All extractors are pure and never raise; unrecognized text yields defaults.
"""

from __future__ import annotations

from npc_importer.extraction.jutsu import (
    DurationInfo,
    TargetInfo,
    classify_action,
    extract_activation,
    extract_damage_parts,
    extract_duration,
    extract_properties,
    extract_range,
    extract_save_ability,
    extract_target,
    governing_ability,
    rank_to_level,
    school_for_nature,
)
from npc_importer.extraction.weapons import (
    WeaponDamage,
    attack_profile,
    extract_weapon_damage,
    extract_weapon_flags,
    extract_weapon_ranges,
    is_ranged,
    weapon_category,
)


__all__ = [
    # Jutsu
    "TargetInfo",
    "DurationInfo",
    "extract_target",
    "extract_duration",
    "classify_action",
    "governing_ability",
    "school_for_nature",
    "extract_save_ability",
    "extract_range",
    "extract_damage_parts",
    "extract_activation",
    "rank_to_level",
    "extract_properties",
    # Weapons
    "WeaponDamage",
    "is_ranged",
    "attack_profile",
    "extract_weapon_ranges",
    "extract_weapon_damage",
    "extract_weapon_flags",
    "weapon_category",
]
