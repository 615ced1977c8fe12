"""Import report types.

A batch import always completes; these records describe what happened to
each NPC and to each of its items.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from npc_importer.models.enums import ImportStage, ReportOutcome, SourceKind


@dataclass(frozen=True)
class ImportReportEntry:
    """One source entry of an NPC and how it was resolved.

    Attributes:
        name: Entry name as given in the source record.
        kind: jutsu, weapon or feat.
        origin: "created", "working-set" or the library name.
        outcome: created, reused or failed.
        error: Failure message when outcome is failed.
    """

    name: str
    kind: SourceKind
    origin: str
    outcome: ReportOutcome
    error: str | None = None

    @property
    def created(self) -> bool:
        return self.outcome is ReportOutcome.CREATED

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for display tables."""
        return {
            "name": self.name,
            "kind": str(self.kind),
            "origin": self.origin,
            "outcome": str(self.outcome),
            "error": self.error,
        }


@dataclass
class NPCImportResult:
    """Outcome of importing a single NPC.

    Attributes:
        name: NPC name (or a positional label if the record had none).
        stage: Last state reached; DONE, FAILED or SKIPPED once finished.
        actor_handle: Handle of the created actor, if it was created.
        report: Per-item report in source order (jutsu, weapons, abilities).
        error: Failure message when stage is FAILED.
    """

    name: str
    stage: ImportStage = ImportStage.START
    actor_handle: str | None = None
    report: list[ImportReportEntry] = field(default_factory=list)
    error: str | None = None

    @property
    def succeeded(self) -> bool:
        return self.stage is ImportStage.DONE

    @property
    def created_count(self) -> int:
        return sum(1 for entry in self.report if entry.outcome is ReportOutcome.CREATED)

    @property
    def reused_count(self) -> int:
        return sum(1 for entry in self.report if entry.outcome is ReportOutcome.REUSED)

    @property
    def failed_items(self) -> list[ImportReportEntry]:
        return [entry for entry in self.report if entry.outcome is ReportOutcome.FAILED]


@dataclass
class BatchResult:
    """Outcome of a batch import.

    Attributes:
        success: NPC name -> created actor handle.
        failed: NPC name -> error message.
        skipped: NPC name -> handle of the already existing actor.
        results: Per-NPC results in input order, one for every record,
            skipped ones included.
    """

    success: dict[str, str] = field(default_factory=dict)
    failed: dict[str, str] = field(default_factory=dict)
    skipped: dict[str, str] = field(default_factory=dict)
    results: list[NPCImportResult] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.success) + len(self.failed) + len(self.skipped)

    def summary(self) -> str:
        """Render a plain-text summary of the batch."""
        lines = [
            "Import Complete",
            f"Total: {self.total}",
            f"Success: {len(self.success)}",
        ]
        if self.skipped:
            lines.append(f"Skipped: {len(self.skipped)}")
            lines.extend(f"  - {name} (already exists)" for name in self.skipped)
        if self.failed:
            lines.append(f"Failed: {len(self.failed)}")
            lines.extend(f"  - {name}: {message}" for name, message in self.failed.items())
        return "\n".join(lines)


__all__ = [
    "ImportReportEntry",
    "NPCImportResult",
    "BatchResult",
]
