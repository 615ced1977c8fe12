"""Source records as produced by the NPC generator.

These models accept the generator's camelCase JSON keys as aliases and are
deliberately lenient: everything but the name may be missing, list fields
accept a bare string, and unknown keys are kept so provenance flags can store
the record exactly as it arrived.
"""

from __future__ import annotations

import re
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from npc_importer.core.constants import PLACEHOLDER_ABILITY_NAME


class SourceModel(BaseModel):
    """Base for generator records: frozen, alias-aware, keeps unknown keys."""

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        extra="allow",
        str_strip_whitespace=True,
    )

    def to_source_dict(self) -> dict[str, Any]:
        """Dump the record with its original JSON keys for provenance flags."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


def _as_list(value: Any) -> Any:
    """Coerce a missing or scalar list field into a list."""
    if value is None:
        return []
    if isinstance(value, str):
        return [value] if value.strip() else []
    return value


# =============================================================================
# Stats
# =============================================================================


class StatsBlock(SourceModel):
    """The six ability scores, keyed by their short names in the source JSON."""

    strength: int = Field(alias="str")
    dexterity: int = Field(alias="dex")
    constitution: int = Field(alias="con")
    intelligence: int = Field(alias="int")
    wisdom: int = Field(alias="wis")
    charisma: int = Field(alias="cha")

    def by_abbreviation(self) -> dict[str, int]:
        """Return scores keyed ``str``, ``dex``, ... in schema order."""
        return {
            "str": self.strength,
            "dex": self.dexterity,
            "con": self.constitution,
            "int": self.intelligence,
            "wis": self.wisdom,
            "cha": self.charisma,
        }


# =============================================================================
# Item Records
# =============================================================================


class SourceAbilityRecord(SourceModel):
    """A jutsu (spell-like ability) as written by the generator.

    Attributes:
        name: Jutsu name, the only required field.
        rank: Rank letter (E, D, C, B, A, S).
        nature: Chakra nature, e.g. "Fire".
        keywords: Jutsu keywords such as "Ninjutsu" or "Taijutsu".
        components: Component codes such as "HS" (hand seals) or "CM".
        chakra_cost: Chakra point cost, kept as given.
        effects: Free-text effect lines, mined for shape, damage and saves.
    """

    name: str = Field(min_length=1)
    rank: str | None = None
    clan: str | None = None
    nature: str | None = None
    keywords: list[str] = Field(default_factory=list)
    components: list[str] = Field(default_factory=list)
    chakra_cost: int | str | None = Field(default=None, alias="chakraCost")
    casting_time: str | None = Field(default=None, alias="castingTime")
    range: str | None = None
    duration: str | None = None
    description: str | None = None
    effects: list[str] = Field(default_factory=list)

    @field_validator("keywords", "components", "effects", mode="before")
    @classmethod
    def coerce_lists(cls, value: Any) -> Any:
        return _as_list(value)

    @field_validator("range", "duration", "casting_time", mode="before")
    @classmethod
    def coerce_text(cls, value: Any) -> Any:
        # Generators sometimes emit bare numbers ("range": 30)
        if isinstance(value, int | float) and not isinstance(value, bool):
            return str(value)
        return value


class SourceWeaponRecord(SourceModel):
    """A weapon as written by the generator."""

    name: str = Field(min_length=1)
    type: str = ""
    damage: str = ""
    properties: list[str] = Field(default_factory=list)
    description: str = ""
    traits: list[str] = Field(default_factory=list)

    @field_validator("properties", "traits", mode="before")
    @classmethod
    def coerce_lists(cls, value: Any) -> Any:
        return _as_list(value)

    @field_validator("type", "damage", "description", mode="before")
    @classmethod
    def coerce_missing_text(cls, value: Any) -> Any:
        return "" if value is None else value


_ABILITY_NAME_RE = re.compile(r"^([^:]+):")
_ABILITY_DESCRIPTION_RE = re.compile(r"^[^:]+:\s*(.+)$")


class FreeTextAbility(BaseModel):
    """A special ability given as ``"<Name>: <description>"``."""

    model_config = ConfigDict(frozen=True)

    text: str
    name: str
    description: str

    @classmethod
    def parse(cls, text: str) -> "FreeTextAbility":
        """Split ability text at its first colon.

        Args:
            text: Raw ability text.

        Returns:
            The parsed ability. Text without a colon gets the placeholder
            name and keeps the whole text as its description.
        """
        name_match = _ABILITY_NAME_RE.match(text)
        description_match = _ABILITY_DESCRIPTION_RE.match(text)
        return cls(
            text=text,
            name=name_match.group(1).strip() if name_match else PLACEHOLDER_ABILITY_NAME,
            description=description_match.group(1) if description_match else text,
        )


# =============================================================================
# NPC Record
# =============================================================================


class SourceNPCRecord(SourceModel):
    """A complete generated NPC.

    ``stats`` is optional at validation time so a record without it can still
    be reported by name; actor conversion rejects it. ``jutsu`` and
    ``weapons`` entries are kept as given and validated one at a time when
    the NPC is imported, so a malformed entry fails only itself.
    """

    name: str = Field(min_length=1)
    clan: str | None = None
    rank: str | None = None
    specialty: str | None = None
    stats: StatsBlock | None = None
    hp: int | None = None
    max_hp: int | None = Field(default=None, alias="maxHp")
    chakra: int | None = None
    max_chakra: int | None = Field(default=None, alias="maxChakra")
    ac: int | None = None
    speed: int | None = None
    cr: int | float | str | None = None
    xp: int | None = None
    chakra_natures: list[str] = Field(default_factory=list, alias="chakraNatures")
    jutsu: list[Any] = Field(default_factory=list)
    weapons: list[Any] = Field(default_factory=list)
    abilities: list[str] = Field(default_factory=list)

    @field_validator("chakra_natures", "jutsu", "weapons", "abilities", mode="before")
    @classmethod
    def coerce_lists(cls, value: Any) -> Any:
        return _as_list(value)

    def free_text_abilities(self) -> list[FreeTextAbility]:
        """Parse every entry of ``abilities``."""
        return [FreeTextAbility.parse(text) for text in self.abilities]


__all__ = [
    "SourceModel",
    "StatsBlock",
    "SourceAbilityRecord",
    "SourceWeaponRecord",
    "FreeTextAbility",
    "SourceNPCRecord",
]
