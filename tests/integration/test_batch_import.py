"""Integration tests for batch NPC import.

These tests run whole batches against the in-memory store and JSON packs,
from raw generator records to attached actors.
"""

from __future__ import annotations

import asyncio
import copy
import json
from pathlib import Path
from typing import Any

import pytest

from npc_importer.conversion.converter import NPCConverter
from npc_importer.core.config import ImportSettings, Settings
from npc_importer.importer.orchestrator import (
    BatchImporter,
    NPCImporter,
    build_batch_importer,
    load_records_file,
)
from npc_importer.importer.verification import verify_import
from npc_importer.models.documents import TargetActorDocument
from npc_importer.models.enums import ImportStage
from npc_importer.storage.memory import InMemoryActorStore, InMemoryWorkingSet
from npc_importer.storage.packs import JsonPackLibrary


@pytest.fixture
def batch_importer(
    converter: NPCConverter,
    actor_store: InMemoryActorStore,
    import_settings: ImportSettings,
) -> BatchImporter:
    """Provide a batch importer over the in-memory store."""
    return BatchImporter(NPCImporter(converter, actor_store), actor_store, import_settings)


@pytest.fixture
def three_npcs(sample_npc_data: dict[str, Any]) -> list[dict[str, Any]]:
    """Provide three records, the second without stats."""
    first = copy.deepcopy(sample_npc_data)
    second = copy.deepcopy(sample_npc_data)
    second["name"] = "Statless Drifter"
    del second["stats"]
    third = copy.deepcopy(sample_npc_data)
    third["name"] = "Kiri Chunin"
    third["clan"] = "Hozuki"
    return [first, second, third]


class TestBatchImport:
    """Tests for BatchImporter.import_batch."""

    def test_one_bad_record(
        self,
        batch_importer: BatchImporter,
        actor_store: InMemoryActorStore,
        three_npcs: list[dict[str, Any]],
    ) -> None:
        """Test a failing record does not stop the batch."""
        result = asyncio.run(batch_importer.import_batch(three_npcs))

        assert list(result.success) == ["Aburame Genin", "Kiri Chunin"]
        assert list(result.failed) == ["Statless Drifter"]
        assert "stats" in result.failed["Statless Drifter"]
        assert result.total == 3
        assert [npc.stage for npc in result.results] == [
            ImportStage.DONE,
            ImportStage.FAILED,
            ImportStage.DONE,
        ]
        assert len(actor_store.actors) == 2

    def test_actors_in_folder(
        self,
        batch_importer: BatchImporter,
        actor_store: InMemoryActorStore,
        three_npcs: list[dict[str, Any]],
    ) -> None:
        """Test imported actors are placed in the configured folder."""
        asyncio.run(batch_importer.import_batch(three_npcs))

        folder_id = actor_store.folders["Imported NPCs"]
        assert {actor.folder_id for actor in actor_store.actors.values()} == {folder_id}

    def test_without_folder(
        self,
        batch_importer: BatchImporter,
        actor_store: InMemoryActorStore,
        sample_npc_data: dict[str, Any],
    ) -> None:
        """Test folders can be turned off."""
        asyncio.run(batch_importer.import_batch([sample_npc_data], create_folder=False))

        assert actor_store.folders == {}
        assert actor_store.actor_named("Aburame Genin").folder_id is None

    def test_folder_failure_fails_npc(
        self,
        converter: NPCConverter,
        import_settings: ImportSettings,
        sample_npc_data: dict[str, Any],
    ) -> None:
        """Test a folder error is reported against the NPC."""
        store = InMemoryActorStore(fail_folders=True)
        batch = BatchImporter(NPCImporter(converter, store), store, import_settings)

        result = asyncio.run(batch.import_batch([sample_npc_data]))

        assert result.success == {}
        assert result.failed["Aburame Genin"].startswith("Folder assignment failed")

    def test_skip_duplicates(
        self,
        batch_importer: BatchImporter,
        actor_store: InMemoryActorStore,
        sample_npc_data: dict[str, Any],
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        """Test an existing actor is skipped without converting the record."""
        handle = asyncio.run(actor_store.create_actor(TargetActorDocument(name="Aburame Genin")))
        calls: list[str] = []
        converter = batch_importer.importer.converter
        original = converter.convert_actor

        def counting_convert_actor(npc: Any, **kwargs: Any) -> TargetActorDocument:
            calls.append(npc.name)
            return original(npc, **kwargs)

        monkeypatch.setattr(converter, "convert_actor", counting_convert_actor)

        result = asyncio.run(batch_importer.import_batch([sample_npc_data]))

        assert result.skipped == {"Aburame Genin": handle}
        assert result.success == {}
        assert calls == []
        assert len(actor_store.actors) == 1
        assert [(npc.name, npc.stage, npc.actor_handle) for npc in result.results] == [
            ("Aburame Genin", ImportStage.SKIPPED, handle),
        ]

    def test_every_record_has_a_result(
        self,
        batch_importer: BatchImporter,
        actor_store: InMemoryActorStore,
        three_npcs: list[dict[str, Any]],
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        """Test skipped records and failed duplicate checks appear in input order."""
        handle = asyncio.run(actor_store.create_actor(TargetActorDocument(name="Aburame Genin")))
        original = actor_store.find_actor

        async def flaky_find_actor(name: str, kind: str) -> str | None:
            if name == "Kiri Chunin":
                raise RuntimeError("actor index unavailable")
            return await original(name, kind)

        monkeypatch.setattr(actor_store, "find_actor", flaky_find_actor)

        result = asyncio.run(batch_importer.import_batch(three_npcs))

        assert [(npc.name, npc.stage) for npc in result.results] == [
            ("Aburame Genin", ImportStage.SKIPPED),
            ("Statless Drifter", ImportStage.FAILED),
            ("Kiri Chunin", ImportStage.FAILED),
        ]
        assert result.results[0].actor_handle == handle
        assert result.results[2].error == "Duplicate check failed: actor index unavailable"
        assert result.failed["Kiri Chunin"] == result.results[2].error
        assert len(result.results) == result.total

    def test_duplicates_imported_when_not_skipping(
        self,
        batch_importer: BatchImporter,
        actor_store: InMemoryActorStore,
        sample_npc_data: dict[str, Any],
    ) -> None:
        """Test skip_duplicates=False imports a second actor."""
        asyncio.run(actor_store.create_actor(TargetActorDocument(name="Aburame Genin")))

        result = asyncio.run(batch_importer.import_batch([sample_npc_data], skip_duplicates=False))

        assert "Aburame Genin" in result.success
        assert len(actor_store.actors) == 2

    def test_progress_and_summary(
        self,
        batch_importer: BatchImporter,
        three_npcs: list[dict[str, Any]],
    ) -> None:
        """Test progress is reported before each record and summarized."""
        progress: list[tuple[int, int, str]] = []

        result = asyncio.run(
            batch_importer.import_batch(
                three_npcs,
                on_progress=lambda current, total, name: progress.append((current, total, name)),
            )
        )

        assert progress == [
            (1, 3, "Aburame Genin"),
            (2, 3, "Statless Drifter"),
            (3, 3, "Kiri Chunin"),
        ]
        summary = result.summary()
        assert "Total: 3" in summary
        assert "Success: 2" in summary
        assert "  - Statless Drifter: NPC record has no stats block" in summary

    def test_single_record_payload(
        self,
        batch_importer: BatchImporter,
        sample_npc_data: dict[str, Any],
    ) -> None:
        """Test a lone mapping is imported as a one-record batch."""
        result = asyncio.run(batch_importer.import_batch(sample_npc_data))

        assert list(result.success) == ["Aburame Genin"]

    def test_empty_batch(self, batch_importer: BatchImporter) -> None:
        """Test nothing to import."""
        result = asyncio.run(batch_importer.import_batch([]))

        assert result.total == 0
        assert result.summary().startswith("Import Complete")


class TestWiredImport:
    """Tests for build_batch_importer with JSON packs."""

    def test_pack_items_reused(
        self,
        tmp_path: Path,
        sample_npc_data: dict[str, Any],
    ) -> None:
        """Test a pack spell is reused and the rest synthesized, end to end."""
        pack_dir = tmp_path / "jutsu"
        pack_dir.mkdir()
        (pack_dir / "fire.json").write_text(
            json.dumps(
                [
                    {
                        "_id": "fire0001",
                        "name": "Fire Release - Great Fireball Technique",
                        "type": "spell",
                        "system": {"level": 3, "chakraCost": 6},
                    }
                ]
            )
        )
        records_path = tmp_path / "npcs.json"
        records_path.write_text(json.dumps([sample_npc_data]))

        store = InMemoryActorStore()
        settings = Settings(
            importer=ImportSettings(folder_name="Generated"),
        )
        batch = build_batch_importer(
            InMemoryWorkingSet(),
            [JsonPackLibrary(pack_dir, name="jutsu-pack")],
            store,
            settings,
        )

        result = asyncio.run(batch.import_batch(load_records_file(records_path)))

        npc = result.results[0]
        assert npc.succeeded
        assert [(entry.origin, str(entry.outcome)) for entry in npc.report] == [
            ("jutsu-pack", "reused"),
            ("created", "created"),
            ("created", "created"),
        ]

        stored = store.actor_named("Aburame Genin")
        assert stored.folder_id == store.folders["Generated"]
        spell = stored.items[0]
        assert spell.id != "fire0001"
        assert spell.flags["narutogen"]["resolved"]["origin"] == "jutsu-pack"

        report = verify_import(stored.document, stored.items, provenance_scope="narutogen")
        assert report.passed

    def test_logging_follows_settings(
        self,
        capsys: pytest.CaptureFixture[str],
        sample_npc_data: dict[str, Any],
    ) -> None:
        """Test the wired importer logs JSON events stamped with the configured app name."""
        settings = Settings(app_name="Village Import", json_logs=True, log_level="INFO")
        batch = build_batch_importer(InMemoryWorkingSet(), [], InMemoryActorStore(), settings)

        asyncio.run(batch.import_batch([sample_npc_data]))

        lines = [json.loads(line) for line in capsys.readouterr().out.splitlines()]
        events = [line["event"] for line in lines]
        assert events[0] == "Batch import started"
        assert "NPC imported" in events
        assert events[-1] == "Batch import complete"
        assert {line["app"] for line in lines} == {"Village Import"}
        assert "Import stage" not in events
