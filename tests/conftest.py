"""Pytest configuration and shared fixtures.

This module provides common fixtures for the NPC importer test suite:
source records as the generator writes them, in-memory collaborators and a
wired converter/importer.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import pytest


if TYPE_CHECKING:
    from collections.abc import Generator

    from npc_importer.conversion.converter import NPCConverter
    from npc_importer.core.config import ImportSettings
    from npc_importer.models.documents import SpellDocument, WeaponDocument
    from npc_importer.resolution.content_index import ContentIndex
    from npc_importer.storage.memory import InMemoryActorStore, InMemoryWorkingSet


# =============================================================================
# Configuration Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def reset_settings_cache() -> Generator[None, None, None]:
    """Reset the settings cache before and after each test."""
    from npc_importer.core.config import clear_settings_cache

    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture(autouse=True)
def reset_logging() -> Generator[None, None, None]:
    """Restore structlog defaults and drop bound context after each test."""
    import structlog

    yield
    structlog.contextvars.clear_contextvars()
    structlog.reset_defaults()


@pytest.fixture
def import_settings() -> ImportSettings:
    """Provide import settings with default scopes and labels."""
    from npc_importer.core.config import ImportSettings

    return ImportSettings()


# =============================================================================
# Source Record Fixtures
# =============================================================================


@pytest.fixture
def sample_jutsu_data() -> dict[str, Any]:
    """Provide a jutsu record as written by the generator.

    Returns:
        Dictionary with camelCase keys.
    """
    return {
        "name": "Fire Release: Great Fireball Technique",
        "rank": "C",
        "nature": "Fire",
        "keywords": ["Ninjutsu"],
        "components": ["HS", "CM"],
        "chakraCost": 6,
        "castingTime": "1 Action",
        "range": "60 feet",
        "duration": "Instant",
        "description": "A torrent of flame. Targets must make a Dex save.",
        "effects": ["15-foot cone of flame", "Deals 4d6 fire damage on a failed save"],
    }


@pytest.fixture
def sample_weapon_data() -> dict[str, Any]:
    """Provide a thrown weapon record.

    Returns:
        Dictionary of weapon data.
    """
    return {
        "name": "Kunai",
        "type": "Kunai",
        "damage": "1d4 + 2",
        "properties": ["Light", "Thrown (20/60)"],
        "description": "A double-edged throwing knife.",
    }


@pytest.fixture
def sample_npc_data(
    sample_jutsu_data: dict[str, Any],
    sample_weapon_data: dict[str, Any],
) -> dict[str, Any]:
    """Provide a complete NPC record.

    Args:
        sample_jutsu_data: One jutsu record.
        sample_weapon_data: One weapon record.

    Returns:
        Dictionary of NPC data.
    """
    return {
        "name": "Aburame Genin",
        "clan": "Aburame",
        "rank": "Genin",
        "specialty": "Ninjutsu",
        "stats": {"str": 10, "dex": 14, "con": 12, "int": 13, "wis": 15, "cha": 8},
        "hp": 22,
        "maxHp": 22,
        "chakra": 18,
        "maxChakra": 18,
        "ac": 13,
        "speed": 30,
        "cr": 1,
        "xp": 200,
        "chakraNatures": ["Fire", "Earth"],
        "jutsu": [sample_jutsu_data],
        "weapons": [sample_weapon_data],
        "abilities": ["Insect Host: The genin's body houses a colony of kikaichu."],
    }


# =============================================================================
# Document Fixtures
# =============================================================================


@pytest.fixture
def existing_fireball() -> SpellDocument:
    """Provide a curated spell document for the sample jutsu."""
    from npc_importer.models.documents import SpellDocument

    return SpellDocument.model_validate(
        {
            "_id": "spell0000000001",
            "name": "Fire Release - Great Fireball Technique",
            "img": "curated/fireball.webp",
            "system": {"level": 3, "school": "evo", "chakraCost": 6},
            "flags": {"curated": {"reviewed": True}},
        }
    )


@pytest.fixture
def existing_kunai() -> WeaponDocument:
    """Provide a curated weapon document named like the sample weapon."""
    from npc_importer.models.documents import WeaponDocument

    return WeaponDocument.model_validate(
        {
            "_id": "weapon000000001",
            "name": "KUNAI",
            "system": {"damage": {"parts": [["1d4", "piercing"]]}},
        }
    )


# =============================================================================
# Collaborator Fixtures
# =============================================================================


@pytest.fixture
def working_set() -> InMemoryWorkingSet:
    """Provide an empty working set."""
    from npc_importer.storage.memory import InMemoryWorkingSet

    return InMemoryWorkingSet()


@pytest.fixture
def actor_store() -> InMemoryActorStore:
    """Provide an empty actor store."""
    from npc_importer.storage.memory import InMemoryActorStore

    return InMemoryActorStore()


@pytest.fixture
def content_index(working_set: InMemoryWorkingSet) -> ContentIndex:
    """Provide a content index over the working set with no libraries."""
    from npc_importer.resolution.content_index import ContentIndex

    return ContentIndex(working_set, [], fetch_attempts=1, fetch_backoff=0)


@pytest.fixture
def converter(content_index: ContentIndex, import_settings: ImportSettings) -> NPCConverter:
    """Provide a converter using the bundled icon tables."""
    from npc_importer.assets.resolver import IconResolver
    from npc_importer.conversion.converter import NPCConverter

    return NPCConverter(content_index, IconResolver(), import_settings)
