"""Field extractors for jutsu (spell-like abilities).

Every function here is pure and total over free text: when the text carries
no recognizable structure the documented default is returned. Checks run in
a fixed order and the first match wins, so the order of the tests below is
part of the behavior.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass

from npc_importer.core.constants import (
    DEFAULT_JUTSU_LEVEL,
    DEFAULT_SCHOOL,
    NATURE_SCHOOLS,
    RANK_LEVELS,
    SELF_RANGE_FT,
    SHAPE_DEFAULT_DISTANCES,
    TOUCH_RANGE_FT,
    UNPARSED_RANGE_FT,
)
from npc_importer.models.enums import ActionType, ActivationType


_FIRST_INT = re.compile(r"(\d+)")
_DAMAGE_DICE = re.compile(r"(\d+d\d+)(?:\s+(\w+)\s+damage)?", re.IGNORECASE)

# (token(s) announcing the shape, measurement pattern, reported type)
_SHAPES: tuple[tuple[tuple[str, ...], re.Pattern[str], str], ...] = (
    (("cone",), re.compile(r"(\d+)-foot cone"), "cone"),
    (("line",), re.compile(r"(\d+)-foot line"), "line"),
    (("radius", "sphere"), re.compile(r"(\d+)-foot (?:radius|sphere)"), "radius"),
    (("cube",), re.compile(r"(\d+)-foot cube"), "cube"),
)

_DURATION_UNITS = (
    ("minute", "minute"),
    ("hour", "hour"),
    ("round", "round"),
    ("turn", "turn"),
    ("day", "day"),
)
INSTANTANEOUS = "inst"

# Ability abbreviation and its full name, in match priority
_SAVE_ABILITIES = (
    ("dex", "dexterity"),
    ("con", "constitution"),
    ("wis", "wisdom"),
    ("str", "strength"),
    ("int", "intelligence"),
    ("cha", "charisma"),
)

_COMPONENT_PROPERTIES = (
    ("HS", "somatic"),
    ("CM", "verbal"),
)


@dataclass(frozen=True)
class TargetInfo:
    """Area shape or creature count an ability affects."""

    type: str
    value: int
    units: str


@dataclass(frozen=True)
class DurationInfo:
    value: str
    units: str


def _joined_lower(parts: Iterable[str | None]) -> str:
    return " ".join(part for part in parts if part).lower()


def extract_target(effects: Iterable[str]) -> TargetInfo:
    """Find the area shape named in a jutsu's effects.

    Shapes are checked cone, line, radius/sphere, cube. A leading
    ``<N>-foot`` measurement sets the size, otherwise the shape's default
    distance applies.

    Args:
        effects: Effect lines of the jutsu.

    Returns:
        The shape, or a single creature target when no shape is named.

    Example:
        >>> extract_target(["15-foot cone of flame"])
        TargetInfo(type='cone', value=15, units='ft')
    """
    text = _joined_lower(effects)
    for tokens, measurement, shape in _SHAPES:
        if any(token in text for token in tokens):
            match = measurement.search(text)
            value = int(match.group(1)) if match else SHAPE_DEFAULT_DISTANCES[shape]
            return TargetInfo(type=shape, value=value, units="ft")
    return TargetInfo(type="creature", value=1, units="")


def extract_duration(duration: str | None) -> DurationInfo:
    """Split a duration text into a numeric value and a unit.

    Args:
        duration: Free-text duration such as "Concentration, up to 1 minute".

    Returns:
        Value is the first integer as a string (or ""); units are found by
        substring in the order minute, hour, round, turn, day and default to
        instantaneous. An absent duration yields two empty strings.
    """
    if not duration:
        return DurationInfo(value="", units="")
    match = _FIRST_INT.search(duration)
    lowered = duration.lower()
    units = next(
        (unit for token, unit in _DURATION_UNITS if token in lowered),
        INSTANTANEOUS,
    )
    return DurationInfo(value=match.group(1) if match else "", units=units)


def classify_action(description: str | None, effects: Iterable[str]) -> ActionType:
    """Decide whether a jutsu forces a save, makes an attack, heals or neither."""
    combined = _joined_lower([*effects, description])
    if "saving throw" in combined or "save" in combined:
        return ActionType.SAVE
    if "attack" in combined:
        return ActionType.RANGED_SPELL_ATTACK
    if "heal" in combined or "hit point" in combined or "hp" in combined:
        return ActionType.HEAL
    return ActionType.UTILITY


def governing_ability(keywords: Iterable[str]) -> str:
    """Taijutsu uses strength, genjutsu wisdom, everything else intelligence."""
    joined = _joined_lower(keywords)
    if "taijutsu" in joined:
        return "str"
    if "genjutsu" in joined:
        return "wis"
    return "int"


def school_for_nature(nature: str | None) -> str:
    return NATURE_SCHOOLS.get((nature or "").lower(), DEFAULT_SCHOOL)


def extract_save_ability(description: str | None, effects: Iterable[str]) -> str:
    """Find which ability a jutsu's saving throw uses.

    Args:
        description: Jutsu description.
        effects: Effect lines.

    Returns:
        The ability abbreviation of the first phrasing found, checked in the
        order dex, con, wis, str, int, cha; "" when no save is named.
    """
    text = _joined_lower([description, *effects])
    for abbreviation, full_name in _SAVE_ABILITIES:
        if f"{abbreviation} save" in text or f"{full_name} save" in text:
            return abbreviation
    return ""


def extract_range(range_text: str | None) -> int:
    """Convert a range text to feet.

    "Self" is 0 and "Touch" is 5. Otherwise the first number is used; a
    range with no number at all falls back to 30 feet.
    """
    if not range_text:
        return SELF_RANGE_FT
    lowered = range_text.lower()
    if "self" in lowered:
        return SELF_RANGE_FT
    if "touch" in lowered:
        return TOUCH_RANGE_FT
    match = _FIRST_INT.search(range_text)
    return int(match.group(1)) if match else UNPARSED_RANGE_FT


def extract_damage_parts(effects: Iterable[str]) -> list[tuple[str, str]]:
    """Collect dice damage from effect lines.

    Each effect line contributes its first ``NdM`` expression, with the
    damage type when written as ``NdM <type> damage``.

    Args:
        effects: Effect lines, in order.

    Returns:
        ``(dice, damage type)`` pairs in effect order; the type is "" when
        not stated.
    """
    parts: list[tuple[str, str]] = []
    for effect in effects:
        match = _DAMAGE_DICE.search(effect)
        if match:
            parts.append((match.group(1), (match.group(2) or "").lower()))
    return parts


def extract_activation(casting_time: str | None) -> ActivationType:
    lowered = (casting_time or "").lower()
    if "bonus" in lowered:
        return ActivationType.BONUS
    if "reaction" in lowered:
        return ActivationType.REACTION
    return ActivationType.ACTION


def rank_to_level(rank: str | None) -> int:
    """Map a rank letter to a spell level; unknown ranks are level 1."""
    return RANK_LEVELS.get(rank or "", DEFAULT_JUTSU_LEVEL)


def extract_properties(components: Iterable[str], duration: str | None) -> list[str]:
    """Derive spell properties from component codes and the duration text."""
    codes = set(components)
    properties = [name for code, name in _COMPONENT_PROPERTIES if code in codes]
    if duration and "Concentration" in duration:
        properties.append("concentration")
    return properties


__all__ = [
    "INSTANTANEOUS",
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
]
