"""Icon resolution for imported actors and items.

Each chain is a fixed priority list ending in a default, so every lookup
returns a path:

- jutsu: nature (exact) > first keyword with an icon > clan (exact) > default
- weapon: exact key > first key containing or contained in the input,
  case-insensitively > default
- actor: clan (exact) > rank (exact) > default
- feature: first pattern that is a substring of the name > default

Tables are data. To change icons, load or construct another
:class:`IconTables` and inject it; the chains themselves do not vary.

Example:
    >>> resolver = IconResolver()
    >>> resolver.jutsu_icon(nature="Fire", keywords=["Taijutsu"])
    'systems/n5eb/assets/Icons & Images/Icons/Fire.png'
"""

from __future__ import annotations

import json
from collections.abc import Iterable
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from npc_importer.assets import icon_tables as defaults
from npc_importer.core.exceptions import ConfigurationError
from npc_importer.core.logging import get_logger


logger = get_logger(__name__)


# =============================================================================
# Tables
# =============================================================================


class _TableModel(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")


class JutsuIconTable(_TableModel):
    nature: dict[str, str] = Field(default_factory=lambda: dict(defaults.JUTSU_NATURE_ICONS))
    keyword: dict[str, str] = Field(default_factory=lambda: dict(defaults.JUTSU_KEYWORD_ICONS))
    clan: dict[str, str] = Field(default_factory=lambda: dict(defaults.JUTSU_CLAN_ICONS))
    default: str = defaults.JUTSU_DEFAULT_ICON


class WeaponIconTable(_TableModel):
    icons: dict[str, str] = Field(default_factory=lambda: dict(defaults.WEAPON_ICONS))
    default: str = defaults.WEAPON_DEFAULT_ICON


class ActorIconTable(_TableModel):
    clan: dict[str, str] = Field(default_factory=lambda: dict(defaults.ACTOR_CLAN_ICONS))
    rank: dict[str, str] = Field(default_factory=lambda: dict(defaults.ACTOR_RANK_ICONS))
    default: str = defaults.ACTOR_DEFAULT_ICON


class FeatureIconTable(_TableModel):
    patterns: dict[str, str] = Field(
        default_factory=lambda: dict(defaults.FEATURE_PATTERN_ICONS)
    )
    default: str = defaults.FEATURE_DEFAULT_ICON


class IconTables(_TableModel):
    """All four icon tables.

    Sections omitted from a JSON override keep the bundled defaults; a
    section that is present replaces the default section as a whole.
    """

    jutsu: JutsuIconTable = Field(default_factory=JutsuIconTable)
    weapons: WeaponIconTable = Field(default_factory=WeaponIconTable)
    actors: ActorIconTable = Field(default_factory=ActorIconTable)
    features: FeatureIconTable = Field(default_factory=FeatureIconTable)

    @classmethod
    def from_json_file(cls, path: Path | str) -> "IconTables":
        """Load icon tables from a JSON file.

        Args:
            path: JSON file shaped like this model.

        Returns:
            The loaded tables.

        Raises:
            ConfigurationError: If the file cannot be read or does not match
                the table layout.
        """
        path = Path(path)
        try:
            raw = json.loads(path.read_text(encoding="utf-8"))
            return cls.model_validate(raw)
        except (OSError, json.JSONDecodeError, ValidationError) as exc:
            raise ConfigurationError(
                f"Invalid icon table file: {exc}",
                config_key="icon_table_path",
                details={"path": str(path)},
            ) from exc


# =============================================================================
# Resolver
# =============================================================================


class IconResolver:
    """Resolve icon paths through the fixed priority chains.

    Attributes:
        tables: The icon tables lookups run against.
    """

    def __init__(self, tables: IconTables | None = None) -> None:
        self.tables = tables or IconTables()

    @classmethod
    def from_path(cls, path: Path | str | None) -> "IconResolver":
        """Build a resolver from an optional JSON table override."""
        if path is None:
            return cls()
        logger.info("Loading icon tables", path=str(path))
        return cls(IconTables.from_json_file(path))

    def jutsu_icon(
        self,
        *,
        nature: str | None = None,
        keywords: Iterable[str] = (),
        clan: str | None = None,
    ) -> str:
        """Icon for a jutsu. Nature always wins over keywords."""
        table = self.tables.jutsu
        if nature and nature in table.nature:
            return table.nature[nature]
        for keyword in keywords:
            if keyword in table.keyword:
                return table.keyword[keyword]
        if clan and clan in table.clan:
            return table.clan[clan]
        return table.default

    def weapon_icon(self, category: str | None) -> str:
        """Icon for a weapon, looked up by its category (or name).

        Args:
            category: Weapon category or, failing that, the weapon name.

        Returns:
            The exact entry, else the first entry whose key and the input
            contain one another (ignoring case), else the default.
        """
        table = self.tables.weapons
        if not category:
            return table.default
        if category in table.icons:
            return table.icons[category]
        lowered = category.lower()
        for key, icon in table.icons.items():
            key_lowered = key.lower()
            if key_lowered in lowered or lowered in key_lowered:
                return icon
        return table.default

    def actor_icon(self, clan: str | None = None, rank: str | None = None) -> str:
        table = self.tables.actors
        if clan and clan in table.clan:
            return table.clan[clan]
        if rank and rank in table.rank:
            return table.rank[rank]
        return table.default

    def feature_icon(self, name: str | None) -> str:
        table = self.tables.features
        for pattern, icon in table.patterns.items():
            if name and pattern in name:
                return icon
        return table.default


__all__ = [
    "JutsuIconTable",
    "WeaponIconTable",
    "ActorIconTable",
    "FeatureIconTable",
    "IconTables",
    "IconResolver",
]
