"""Tests for the JSON pack library and the in-memory collaborators."""

from __future__ import annotations

import asyncio
import json
from pathlib import Path

import pytest

from npc_importer.core.exceptions import ContentLookupError
from npc_importer.models.documents import SpellDocument, TargetActorDocument, WeaponDocument
from npc_importer.models.enums import ItemKind
from npc_importer.resolution.sources import ActorStore, ContentLibrary, WorkingSet
from npc_importer.storage.memory import InMemoryActorStore, InMemoryLibrary, InMemoryWorkingSet
from npc_importer.storage.packs import JsonPackLibrary


def _write(path: Path, data: object) -> None:
    path.write_text(json.dumps(data), encoding="utf-8")


class TestJsonPackLibrary:
    """Tests for JsonPackLibrary."""

    def test_listing_order_and_ids(self, tmp_path: Path) -> None:
        """Test entries are ordered by file, then position, with derived ids."""
        _write(tmp_path / "b-weapons.json", [{"name": "Kunai", "type": "weapon"}, {"name": "Senbon", "type": "weapon"}])
        _write(tmp_path / "a-jutsu.json", {"_id": "jutsu01", "name": "Chidori", "type": "spell"})
        (tmp_path / "notes.txt").write_text("ignored")

        pack = JsonPackLibrary(tmp_path, name="pack")
        entries = asyncio.run(pack.list_entries())

        assert [(entry.entry_id, entry.name, entry.kind) for entry in entries] == [
            ("jutsu01", "Chidori", ItemKind.SPELL),
            ("b-weapons.0", "Kunai", ItemKind.WEAPON),
            ("b-weapons.1", "Senbon", ItemKind.WEAPON),
        ]

    def test_fetch(self, tmp_path: Path) -> None:
        """Test fetching a document by entry id."""
        _write(tmp_path / "gear.json", [{"name": "Kunai", "type": "weapon", "system": {"quantity": 10}}])
        pack = JsonPackLibrary(tmp_path)

        document = asyncio.run(pack.fetch("gear.0"))

        assert isinstance(document, WeaponDocument)
        assert document.system.quantity == 10
        assert pack.name == tmp_path.name

    def test_fetch_unknown(self, tmp_path: Path) -> None:
        """Test fetching an id that is not in the pack."""
        pack = JsonPackLibrary(tmp_path)

        with pytest.raises(ContentLookupError):
            asyncio.run(pack.fetch("nothing.0"))

    def test_files_read_once(self, tmp_path: Path) -> None:
        """Test later changes on disk are not seen."""
        _write(tmp_path / "gear.json", [{"name": "Kunai", "type": "weapon"}])
        pack = JsonPackLibrary(tmp_path)
        asyncio.run(pack.list_entries())

        _write(tmp_path / "more.json", [{"name": "Senbon", "type": "weapon"}])

        assert len(asyncio.run(pack.list_entries())) == 1

    def test_invalid_file(self, tmp_path: Path) -> None:
        """Test an unknown item type makes the pack unavailable."""
        _write(tmp_path / "gear.json", [{"name": "Plate", "type": "armor"}])

        with pytest.raises(ContentLookupError):
            asyncio.run(JsonPackLibrary(tmp_path).list_entries())

    def test_missing_directory(self, tmp_path: Path) -> None:
        """Test a pack directory that does not exist."""
        with pytest.raises(ContentLookupError):
            asyncio.run(JsonPackLibrary(tmp_path / "absent").list_entries())

    def test_satisfies_protocol(self, tmp_path: Path) -> None:
        """Test the pack is usable as a content library."""
        assert isinstance(JsonPackLibrary(tmp_path), ContentLibrary)


class TestInMemoryCollaborators:
    """Tests for the in-memory working set, library and store."""

    def test_protocols(self) -> None:
        """Test each collaborator satisfies its interface."""
        assert isinstance(InMemoryWorkingSet(), WorkingSet)
        assert isinstance(InMemoryLibrary("pack"), ContentLibrary)
        assert isinstance(InMemoryActorStore(), ActorStore)

    def test_working_set_filters_kind(self) -> None:
        """Test listing by kind and identity assignment."""
        working_set = InMemoryWorkingSet([SpellDocument(name="Chidori")])
        working_set.add(WeaponDocument(name="Kunai"))

        spells = asyncio.run(working_set.list_items(ItemKind.SPELL))

        assert [item.name for item in spells] == ["Chidori"]
        assert spells[0].id is not None
        assert len(asyncio.run(working_set.list_items())) == 2

    def test_actor_store_round_trip(self) -> None:
        """Test create, find, attach and folder assignment."""
        store = InMemoryActorStore()

        async def run() -> str:
            handle = await store.create_actor(TargetActorDocument(name="Kiri Chunin"))
            await store.attach_items(handle, [WeaponDocument(name="Kunai")])
            folder_id = await store.get_or_create_folder("Imported NPCs")
            assert await store.get_or_create_folder("Imported NPCs") == folder_id
            await store.assign_folder(handle, folder_id)
            return handle

        handle = asyncio.run(run())
        stored = store.actors[handle]

        assert asyncio.run(store.find_actor("Kiri Chunin", "npc")) == handle
        assert asyncio.run(store.find_actor("kiri chunin", "npc")) is None
        assert stored.items[0].id is not None
        assert stored.folder_id == store.folders["Imported NPCs"]
        assert store.actor_named("Kiri Chunin") is stored
