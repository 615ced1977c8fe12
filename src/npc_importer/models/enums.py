"""Enumerations shared by the data model.

Values are the literal strings the target store expects, so members can be
written into documents directly.
"""

from __future__ import annotations

from enum import StrEnum


class ItemKind(StrEnum):
    """Item document types in the target store."""

    SPELL = "spell"
    WEAPON = "weapon"
    FEAT = "feat"


class SourceKind(StrEnum):
    """Kind of source entry an import report line describes."""

    JUTSU = "jutsu"
    WEAPON = "weapon"
    FEAT = "feat"


class ActionType(StrEnum):
    """Item action types."""

    SAVE = "save"
    RANGED_SPELL_ATTACK = "rsak"
    HEAL = "heal"
    UTILITY = "util"
    MELEE_WEAPON_ATTACK = "mwak"
    RANGED_WEAPON_ATTACK = "rwak"


class ActivationType(StrEnum):
    """Action economy cost of using an item."""

    ACTION = "action"
    BONUS = "bonus"
    REACTION = "reaction"


class ReportOutcome(StrEnum):
    """What happened to one source entry during an import."""

    CREATED = "created"
    """Synthesized from the source record."""

    REUSED = "reused"
    """Cloned from an existing document."""

    FAILED = "failed"
    """Could not be resolved or synthesized."""


class ImportStage(StrEnum):
    """States of the per-NPC import state machine.

    SKIPPED marks a batch record left alone because its actor already exists.
    """

    START = "start"
    ACTOR_CREATED = "actor_created"
    ITEMS_RESOLVED = "items_resolved"
    ATTACHED = "attached"
    DONE = "done"
    FAILED = "failed"
    SKIPPED = "skipped"


__all__ = [
    "ItemKind",
    "SourceKind",
    "ActionType",
    "ActivationType",
    "ReportOutcome",
    "ImportStage",
]
