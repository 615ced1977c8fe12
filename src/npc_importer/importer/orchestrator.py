"""Import orchestration for single NPCs and batches.

Each NPC walks a small state machine::

    START -> ACTOR_CREATED -> ITEMS_RESOLVED -> ATTACHED -> DONE
      \\___________\\_______________\\______________\\____> FAILED

An actor is created before its items are resolved, so a failure after
ACTOR_CREATED leaves that actor in the store. Item failures do not fail the
NPC; they are reported per item. A batch always runs to the end: every record
ends up in exactly one of success, skipped or failed.

Example:
    >>> importer = NPCImporter(converter, store)
    >>> batch = BatchImporter(importer, store)
    >>> result = await batch.import_batch(load_records_file("npcs.json"))
    >>> print(result.summary())
"""

from __future__ import annotations

import json
from collections.abc import Callable, Iterable, Mapping, Sequence
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from npc_importer.assets.resolver import IconResolver
from npc_importer.conversion.converter import ConvertedItem, NPCConverter, SourceItemRecord
from npc_importer.core.config import ImportSettings, Settings, get_settings
from npc_importer.core.constants import ACTOR_KIND
from npc_importer.core.exceptions import AttachError, NpcImporterError, SourceRecordError
from npc_importer.core.logging import bind_context, clear_context, get_logger, setup_logging
from npc_importer.models.documents import TargetItemDocument
from npc_importer.models.enums import ImportStage, ReportOutcome, SourceKind
from npc_importer.models.report import BatchResult, ImportReportEntry, NPCImportResult
from npc_importer.models.source import (
    FreeTextAbility,
    SourceAbilityRecord,
    SourceNPCRecord,
    SourceWeaponRecord,
)
from npc_importer.resolution.content_index import ContentIndex
from npc_importer.resolution.sources import ActorStore, ContentLibrary, WorkingSet


logger = get_logger(__name__)

ProgressCallback = Callable[[int, int, str], None]
"""Called as ``(current, total, name)`` before each NPC is processed."""


# =============================================================================
# Record Handling
# =============================================================================


def as_record_list(data: Any) -> list[Any]:
    """Normalize a parsed payload into a list of records.

    A single record (mapping or model) becomes a one-item list; None becomes
    an empty list.
    """
    if data is None:
        return []
    if isinstance(data, (Mapping, SourceNPCRecord)):
        return [data]
    return list(data)


def load_records_file(path: Path | str) -> list[Any]:
    """Read a JSON file holding one NPC record or a list of them.

    Raises:
        SourceRecordError: If the file cannot be read or is not valid JSON.
    """
    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise SourceRecordError(
            f"Cannot read NPC records: {exc}",
            details={"path": str(path)},
        ) from exc
    return as_record_list(data)


def record_name(data: Any) -> str | None:
    """Best-effort name of a raw or validated record."""
    if isinstance(data, SourceNPCRecord):
        return data.name
    if isinstance(data, Mapping):
        name = data.get("name")
        if isinstance(name, str) and name.strip():
            return name.strip()
    return None


def record_label(data: Any, position: int) -> str:
    """Name used in reports, falling back to the record's position."""
    return record_name(data) or f"NPC #{position}"


def _validation_error(exc: ValidationError, what: str, label: str | None) -> SourceRecordError:
    errors = exc.errors(include_url=False, include_input=False)
    field_name = ".".join(str(part) for part in errors[0]["loc"]) if errors else None
    return SourceRecordError(
        f"Invalid {what} ({exc.error_count()} validation error(s))",
        record_name=label,
        field_name=field_name,
        details={"errors": [error["msg"] for error in errors]},
    )


def coerce_record(data: Any, *, label: str | None = None) -> SourceNPCRecord:
    """Validate a raw record.

    Raises:
        SourceRecordError: If the record does not validate.
    """
    if isinstance(data, SourceNPCRecord):
        return data
    try:
        return SourceNPCRecord.model_validate(data)
    except ValidationError as exc:
        raise _validation_error(exc, "NPC record", label) from exc


_ITEM_MODELS: dict[SourceKind, type[SourceAbilityRecord] | type[SourceWeaponRecord]] = {
    SourceKind.JUTSU: SourceAbilityRecord,
    SourceKind.WEAPON: SourceWeaponRecord,
}


def item_label(kind: SourceKind, data: Any, position: int) -> str:
    """Name of a jutsu, weapon or ability entry, falling back to its position."""
    if isinstance(data, (SourceAbilityRecord, SourceWeaponRecord, FreeTextAbility)):
        return data.name
    return record_name(data) or f"{kind} #{position}"


def coerce_item(kind: SourceKind, data: Any, *, label: str | None = None) -> SourceItemRecord:
    """Validate one jutsu or weapon entry; abilities pass through.

    Raises:
        SourceRecordError: If the entry does not validate.
    """
    model = _ITEM_MODELS.get(kind)
    if model is None or isinstance(data, model):
        return data
    try:
        return model.model_validate(data)
    except ValidationError as exc:
        raise _validation_error(exc, f"{kind} entry", label) from exc


# =============================================================================
# Single NPC
# =============================================================================


class NPCImporter:
    """Imports one NPC: actor, items, attach.

    Attributes:
        converter: Builds the actor and item documents.
        store: Actor persistence.
    """

    def __init__(self, converter: NPCConverter, store: ActorStore) -> None:
        self.converter = converter
        self.store = store

    async def import_npc(self, record: Any, *, position: int = 1) -> NPCImportResult:
        """Import a single NPC record.

        Args:
            record: A raw mapping or a validated ``SourceNPCRecord``.
            position: 1-based position in the batch, used to label nameless records.

        Returns:
            The result; ``stage`` is DONE or FAILED. Never raises for a bad
            record or a store failure.
        """
        result = NPCImportResult(name=record_label(record, position))
        bind_context(npc=result.name)
        try:
            npc = coerce_record(record, label=result.name)
            actor = self.converter.convert_actor(npc)
            result.actor_handle = await self.store.create_actor(actor)
            self._advance(result, ImportStage.ACTOR_CREATED)

            documents = await self._resolve_items(npc, result)
            self._advance(result, ImportStage.ITEMS_RESOLVED)

            await self._attach(result.actor_handle, documents)
            self._advance(result, ImportStage.ATTACHED)

            self._advance(result, ImportStage.DONE)
            logger.info(
                "NPC imported",
                actor=result.actor_handle,
                created=result.created_count,
                reused=result.reused_count,
                failed_items=len(result.failed_items),
            )
        except NpcImporterError as exc:
            self._fail(result, exc)
        except Exception as exc:
            logger.exception("Unexpected import failure", stage=str(result.stage))
            self._fail(result, exc)
        finally:
            clear_context()
        return result

    def _advance(self, result: NPCImportResult, stage: ImportStage) -> None:
        logger.debug("Import stage", stage=str(stage))
        result.stage = stage

    def _fail(self, result: NPCImportResult, exc: Exception) -> None:
        logger.warning(
            "NPC import failed",
            stage=str(result.stage),
            actor=result.actor_handle,
            error=str(exc),
        )
        result.stage = ImportStage.FAILED
        result.error = str(exc)

    async def _resolve_items(
        self,
        npc: SourceNPCRecord,
        result: NPCImportResult,
    ) -> list[TargetItemDocument]:
        """Convert every jutsu, weapon and ability, recording each outcome.

        An entry that fails validation or conversion gets a FAILED report
        line; the remaining entries are still converted.
        """
        sources: list[tuple[SourceKind, int, Any]] = [
            *((SourceKind.JUTSU, n, entry) for n, entry in enumerate(npc.jutsu, start=1)),
            *((SourceKind.WEAPON, n, entry) for n, entry in enumerate(npc.weapons, start=1)),
            *(
                (SourceKind.FEAT, n, ability)
                for n, ability in enumerate(npc.free_text_abilities(), start=1)
            ),
        ]
        documents: list[TargetItemDocument] = []
        for kind, position, data in sources:
            name = item_label(kind, data, position)
            try:
                source = coerce_item(kind, data, label=name)
                converted: ConvertedItem = await self.converter.convert_ability(source)
            except Exception as exc:
                logger.warning("Item conversion failed", item=name, kind=str(kind), error=str(exc))
                result.report.append(
                    ImportReportEntry(
                        name=name,
                        kind=kind,
                        origin="",
                        outcome=ReportOutcome.FAILED,
                        error=str(exc),
                    )
                )
                continue
            documents.append(converted.document)
            result.report.append(converted.entry)
        return documents

    async def _attach(self, actor_handle: str | None, documents: Sequence[TargetItemDocument]) -> None:
        """Attach all documents in one call.

        Raises:
            AttachError: If the store rejects the attach.
        """
        if not documents or actor_handle is None:
            return
        try:
            await self.store.attach_items(actor_handle, documents)
        except Exception as exc:
            raise AttachError(
                f"Failed to attach items: {exc}",
                actor_handle=actor_handle,
                item_count=len(documents),
            ) from exc


# =============================================================================
# Batch
# =============================================================================


class BatchImporter:
    """Imports many NPCs in input order, never aborting.

    Attributes:
        importer: Per-NPC importer.
        store: Actor store used for duplicate checks and folders.
        settings: Defaults for skip-duplicates and the folder name.
    """

    def __init__(
        self,
        importer: NPCImporter,
        store: ActorStore,
        settings: ImportSettings | None = None,
    ) -> None:
        self.importer = importer
        self.store = store
        self.settings = settings or get_settings().importer

    async def import_batch(
        self,
        records: Iterable[Any] | Mapping[str, Any],
        *,
        skip_duplicates: bool | None = None,
        create_folder: bool = True,
        folder_name: str | None = None,
        on_progress: ProgressCallback | None = None,
    ) -> BatchResult:
        """Import records sequentially.

        Args:
            records: Raw mappings or validated records; a single mapping is
                treated as a one-record batch.
            skip_duplicates: Skip records whose name matches an existing NPC
                actor exactly. Defaults to the configured value.
            create_folder: Place imported actors in a folder.
            folder_name: Folder name; defaults to the configured name.
            on_progress: Called before each record as ``(current, total, name)``.

        Returns:
            Success, skipped and failed records plus per-NPC results.
        """
        batch = as_record_list(records)
        total = len(batch)
        skip = self.settings.skip_duplicates if skip_duplicates is None else skip_duplicates
        folder = (folder_name or self.settings.folder_name) if create_folder else None
        folder_id: str | None = None
        result = BatchResult()

        logger.info("Batch import started", total=total, skip_duplicates=skip, folder=folder)

        for position, data in enumerate(batch, start=1):
            name = record_label(data, position)
            if on_progress is not None:
                on_progress(position, total, name)

            if skip and record_name(data) is not None:
                try:
                    existing = await self.store.find_actor(name, ACTOR_KIND)
                except Exception as exc:
                    logger.warning("Duplicate check failed", npc=name, error=str(exc))
                    error = f"Duplicate check failed: {exc}"
                    result.results.append(
                        NPCImportResult(name, stage=ImportStage.FAILED, error=error)
                    )
                    result.failed[name] = error
                    continue
                if existing is not None:
                    logger.info("Skipping existing NPC", npc=name, actor=existing)
                    result.results.append(
                        NPCImportResult(name, stage=ImportStage.SKIPPED, actor_handle=existing)
                    )
                    result.skipped[name] = existing
                    continue

            npc_result = await self.importer.import_npc(data, position=position)

            if npc_result.succeeded and folder and npc_result.actor_handle is not None:
                try:
                    if folder_id is None:
                        folder_id = await self.store.get_or_create_folder(folder)
                    await self.store.assign_folder(npc_result.actor_handle, folder_id)
                except Exception as exc:
                    logger.warning("Folder assignment failed", npc=name, folder=folder, error=str(exc))
                    npc_result.stage = ImportStage.FAILED
                    npc_result.error = f"Folder assignment failed: {exc}"

            result.results.append(npc_result)
            if npc_result.succeeded and npc_result.actor_handle is not None:
                result.success[npc_result.name] = npc_result.actor_handle
            else:
                result.failed[npc_result.name] = npc_result.error or "Unknown error"

        logger.info(
            "Batch import complete",
            total=result.total,
            success=len(result.success),
            skipped=len(result.skipped),
            failed=len(result.failed),
        )
        return result


def build_batch_importer(
    working_set: WorkingSet,
    libraries: Sequence[ContentLibrary],
    store: ActorStore,
    settings: Settings | None = None,
) -> BatchImporter:
    """Configure logging and wire index, icons, converter and importers from settings.

    Args:
        working_set: Live item collection.
        libraries: Content libraries in lookup order.
        store: Actor store.
        settings: Settings; the cached singleton if None.

    Returns:
        A ready batch importer.
    """
    settings = settings or get_settings()
    setup_logging(settings)
    index = ContentIndex.from_settings(working_set, libraries, settings.index)
    icons = IconResolver.from_path(settings.icons.icon_table_path)
    converter = NPCConverter(index, icons, settings.importer)
    return BatchImporter(NPCImporter(converter, store), store, settings.importer)


__all__ = [
    "ProgressCallback",
    "as_record_list",
    "load_records_file",
    "record_name",
    "record_label",
    "coerce_record",
    "item_label",
    "coerce_item",
    "NPCImporter",
    "BatchImporter",
    "build_batch_importer",
]
