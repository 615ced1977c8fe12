"""Data model: source records, target documents and import reports.

Source records and target documents are Pydantic V2 models; report types are
plain dataclasses.
"""

from __future__ import annotations

from npc_importer.models.documents import (
    ActorSystem,
    FeatDocument,
    ItemDocument,
    SpellDocument,
    TargetActorDocument,
    TargetItemDocument,
    WeaponDocument,
    item_adapter,
    item_list_adapter,
)
from npc_importer.models.enums import (
    ActionType,
    ActivationType,
    ImportStage,
    ItemKind,
    ReportOutcome,
    SourceKind,
)
from npc_importer.models.report import BatchResult, ImportReportEntry, NPCImportResult
from npc_importer.models.source import (
    FreeTextAbility,
    SourceAbilityRecord,
    SourceNPCRecord,
    SourceWeaponRecord,
    StatsBlock,
)


__all__ = [
    # Enums
    "ItemKind",
    "SourceKind",
    "ActionType",
    "ActivationType",
    "ReportOutcome",
    "ImportStage",
    # Source records
    "StatsBlock",
    "SourceAbilityRecord",
    "SourceWeaponRecord",
    "FreeTextAbility",
    "SourceNPCRecord",
    # Documents
    "ItemDocument",
    "SpellDocument",
    "WeaponDocument",
    "FeatDocument",
    "TargetItemDocument",
    "TargetActorDocument",
    "ActorSystem",
    "item_adapter",
    "item_list_adapter",
    # Reports
    "ImportReportEntry",
    "NPCImportResult",
    "BatchResult",
]
