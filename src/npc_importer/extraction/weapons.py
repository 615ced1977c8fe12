"""Field extractors for weapons.

Weapon records carry a free-text category, a damage text such as
``"1d8 + 2"`` and a list of property tags such as ``"Thrown (20/60)"``.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass, field

from npc_importer.core.constants import FALLBACK_WEAPON_DAMAGE, MELEE_RANGE_FT
from npc_importer.models.enums import ActionType


_RANGE_PAIR = re.compile(r"\((\d+)/(\d+)\)")
_DAMAGE_WITH_BONUS = re.compile(r"(\d+d\d+)\s*\+?\s*(\d*)")

_PIERCING_WORDS = ("shuriken", "kunai")
_SLASHING_WORDS = ("sword", "blade")
# Katana deals slashing damage but keeps the simple melee category
_SLASHING_DAMAGE_WORDS = (*_SLASHING_WORDS, "katana")

# Property tag substring -> weapon property flag
_PROPERTY_FLAGS = (
    ("thrown", "thr"),
    ("light", "lgt"),
    ("heavy", "hvy"),
    ("finesse", "fin"),
    ("versatile", "ver"),
    ("two-handed", "two"),
    ("reach", "rch"),
)


@dataclass(frozen=True)
class WeaponDamage:
    """Parsed weapon damage.

    Attributes:
        parts: ``(dice, damage type)`` pairs; the dice never include the bonus.
        bonus: Flat bonus as written, "0" when absent.
    """

    parts: list[tuple[str, str]] = field(default_factory=list)
    bonus: str = "0"


def _lowered(tags: Iterable[str]) -> list[str]:
    return [tag.lower() for tag in tags if tag]


def is_ranged(properties: Iterable[str]) -> bool:
    """A weapon is ranged when any tag mentions "thrown" or "range"."""
    return any("thrown" in tag or "range" in tag for tag in _lowered(properties))


def attack_profile(properties: Iterable[str]) -> tuple[str, ActionType]:
    """Return the governing ability and action type of a weapon attack."""
    if is_ranged(properties):
        return "dex", ActionType.RANGED_WEAPON_ATTACK
    return "str", ActionType.MELEE_WEAPON_ATTACK


def extract_weapon_ranges(properties: Iterable[str]) -> tuple[int, int | None]:
    """Parse normal and long range from property tags.

    The first "thrown" tag is checked before the first "range" tag, whatever
    their order in the list. Each is parsed for ``(normal/long)``.

    Args:
        properties: Weapon property tags.

    Returns:
        ``(normal, long)`` in feet; ``(5, None)`` when no tag carries a range.
    """
    tags = _lowered(properties)
    thrown = next((tag for tag in tags if "thrown" in tag), None)
    ranged = next((tag for tag in tags if "range" in tag), None)
    for tag in (thrown, ranged):
        if tag is None:
            continue
        match = _RANGE_PAIR.search(tag)
        if match:
            return int(match.group(1)), int(match.group(2))
    return MELEE_RANGE_FT, None


def damage_type_for(category: str | None) -> str:
    lowered = (category or "").lower()
    if any(word in lowered for word in _PIERCING_WORDS):
        return "piercing"
    if any(word in lowered for word in _SLASHING_DAMAGE_WORDS):
        return "slashing"
    return "bludgeoning"


def extract_weapon_damage(damage: str | None, category: str | None) -> WeaponDamage:
    """Split a damage text into dice parts and a flat bonus.

    Args:
        damage: Damage text such as ``"1d8 + 2"``.
        category: Weapon category, which decides the damage type.

    Returns:
        One part with the dice and the category's damage type. Text without
        a dice expression gets a 1d4 piercing part.

    Example:
        >>> extract_weapon_damage("1d8 + 2", "Katana")
        WeaponDamage(parts=[('1d8', 'slashing')], bonus='2')
    """
    match = _DAMAGE_WITH_BONUS.search(damage or "")
    if not match:
        return WeaponDamage(parts=[FALLBACK_WEAPON_DAMAGE])
    return WeaponDamage(
        parts=[(match.group(1), damage_type_for(category))],
        bonus=match.group(2) or "0",
    )


def extract_weapon_flags(properties: Iterable[str]) -> list[str]:
    """Map property tags to weapon property flags, in tag order, without repeats."""
    flags: list[str] = []
    for tag in _lowered(properties):
        for word, flag in _PROPERTY_FLAGS:
            if word in tag and flag not in flags:
                flags.append(flag)
    return flags


def weapon_category(category: str | None) -> str:
    lowered = (category or "").lower()
    if any(word in lowered for word in _PIERCING_WORDS):
        return "simpleR"
    if any(word in lowered for word in _SLASHING_WORDS):
        return "martialM"
    return "simpleM"


__all__ = [
    "WeaponDamage",
    "is_ranged",
    "attack_profile",
    "extract_weapon_ranges",
    "damage_type_for",
    "extract_weapon_damage",
    "extract_weapon_flags",
    "weapon_category",
]
