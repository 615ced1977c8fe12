"""Per-NPC and batch import orchestration, plus post-import verification."""

from __future__ import annotations

from npc_importer.importer.orchestrator import (
    BatchImporter,
    NPCImporter,
    ProgressCallback,
    as_record_list,
    build_batch_importer,
    load_records_file,
)
from npc_importer.importer.verification import VerificationReport, verify_import


__all__ = [
    "NPCImporter",
    "BatchImporter",
    "build_batch_importer",
    "ProgressCallback",
    "as_record_list",
    "load_records_file",
    "VerificationReport",
    "verify_import",
]
