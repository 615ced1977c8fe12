"""Configuration management for the NPC importer.

Settings are loaded with pydantic-settings from environment variables and an
optional ``.env`` file.

Example:
    >>> from npc_importer.core.config import get_settings
    >>> settings = get_settings()
    >>> print(settings.importer.system_id)
    'n5eb'

Environment Variables:
    NPC_IMPORTER_LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    NPC_IMPORTER_SKIP_DUPLICATES: Skip NPCs whose actor already exists
    NPC_IMPORTER_FOLDER_NAME: Actor folder that imported NPCs are placed in
    NPC_IMPORTER_INDEX_FETCH_ATTEMPTS: Attempts per library document fetch
    NPC_IMPORTER_ICON_TABLE_PATH: JSON file overriding the default icon tables
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from npc_importer.core.constants import DEFAULT_ABILITY_PROFICIENCY, SYSTEM_ID
from npc_importer.core.exceptions import ConfigurationError


class ImportSettings(BaseSettings):
    """Configuration for document conversion and batch import.

    Attributes:
        system_id: Target game system identifier.
        provenance_scope: Flag scope holding per-document source data.
        importer_scope: Flag scope holding the importer's own actor metadata.
        source_tag: Provenance ``source`` value on imported actors.
        source_label: Label written to the actor's ``details.source``.
        ability_proficiency: Proficiency multiplier on every ability score.
        skip_duplicates: Skip NPCs whose actor already exists.
        folder_name: Actor folder imported NPCs go to; None disables folders.
    """

    model_config = SettingsConfigDict(
        env_prefix="NPC_IMPORTER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    system_id: str = Field(default=SYSTEM_ID, description="Target game system")
    provenance_scope: str = Field(
        default="narutogen",
        min_length=1,
        description="Flag scope for source record provenance",
    )
    importer_scope: str = Field(
        default="narutoImporter",
        min_length=1,
        description="Flag scope for importer metadata",
    )
    source_tag: str = Field(default="narutogen", description="Provenance source tag")
    source_label: str = Field(
        default="Narutogen Import",
        description="Actor details source label",
    )
    ability_proficiency: float = Field(
        default=DEFAULT_ABILITY_PROFICIENCY,
        ge=0,
        le=2,
        description="Ability proficiency multiplier",
    )
    skip_duplicates: bool = Field(
        default=True,
        description="Skip NPCs whose actor already exists",
    )
    folder_name: str | None = Field(
        default="Imported NPCs",
        description="Actor folder for imported NPCs",
    )

    @model_validator(mode="after")
    def validate_scopes(self) -> "ImportSettings":
        """Ensure the two flag scopes do not overwrite each other.

        Returns:
            Self if validation passes.

        Raises:
            ConfigurationError: If both scopes are the same key.
        """
        if self.provenance_scope == self.importer_scope:
            raise ConfigurationError(
                f"provenance_scope and importer_scope must differ "
                f"(both are {self.provenance_scope!r})",
                config_key="importer_scope",
            )
        return self


class IndexSettings(BaseSettings):
    """Configuration for the content index.

    Attributes:
        fetch_attempts: Attempts per library document fetch before a miss.
        fetch_backoff_seconds: Maximum wait between fetch attempts.
    """

    model_config = SettingsConfigDict(
        env_prefix="NPC_IMPORTER_INDEX_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    fetch_attempts: int = Field(
        default=2,
        ge=1,
        le=5,
        description="Attempts per library document fetch",
    )
    fetch_backoff_seconds: float = Field(
        default=1.0,
        ge=0,
        le=30,
        description="Maximum backoff between fetch attempts",
    )


class IconSettings(BaseSettings):
    """Configuration for icon resolution.

    Attributes:
        icon_table_path: Optional JSON file replacing the bundled icon tables.
    """

    model_config = SettingsConfigDict(
        env_prefix="NPC_IMPORTER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    icon_table_path: Path | None = Field(
        default=None,
        description="JSON icon table override",
    )

    @model_validator(mode="after")
    def validate_icon_table_path(self) -> "IconSettings":
        """Ensure a configured icon table file exists.

        Returns:
            Self if validation passes.

        Raises:
            ConfigurationError: If the path is set but is not a file.
        """
        if self.icon_table_path is not None and not self.icon_table_path.is_file():
            raise ConfigurationError(
                f"Icon table file not found: {self.icon_table_path}",
                config_key="icon_table_path",
            )
        return self


class Settings(BaseSettings):
    """Main settings aggregating all configuration domains.

    Attributes:
        app_name: Application name.
        log_level: Logging level.
        json_logs: Emit JSON logs instead of console output.
        importer: Conversion and batch settings.
        index: Content index settings.
        icons: Icon resolution settings.
    """

    model_config = SettingsConfigDict(
        env_prefix="NPC_IMPORTER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        env_nested_delimiter="__",
    )

    app_name: str = Field(default="NPC Importer", description="Application name")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )
    json_logs: bool = Field(default=False, description="Emit JSON logs")

    importer: ImportSettings = Field(default_factory=ImportSettings)
    index: IndexSettings = Field(default_factory=IndexSettings)
    icons: IconSettings = Field(default_factory=IconSettings)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get the settings singleton.

    Returns:
        The cached Settings instance.

    Raises:
        ConfigurationError: If configuration is missing or invalid.
    """
    try:
        return Settings()
    except ConfigurationError:
        raise
    except Exception as exc:
        raise ConfigurationError(
            f"Failed to load importer settings: {exc}",
            details={"original_error": str(exc)},
        ) from exc


def clear_settings_cache() -> None:
    """Clear the settings cache, forcing a reload on next access."""
    get_settings.cache_clear()


__all__ = [
    "ImportSettings",
    "IndexSettings",
    "IconSettings",
    "Settings",
    "get_settings",
    "clear_settings_cache",
]
