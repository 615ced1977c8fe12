"""Read-only content library backed by a directory of JSON item documents.

Each ``*.json`` file in the directory holds one item document or a list of
them. Entries are ordered by file name, then by position within the file.
Documents without an ``_id`` get ``<file stem>.<position>`` as their entry id.

Example:
    >>> pack = JsonPackLibrary("packs/jutsu", name="jutsu-pack")
    >>> entries = await pack.list_entries()
"""

from __future__ import annotations

import asyncio
import json
from pathlib import Path

from pydantic import ValidationError

from npc_importer.core.exceptions import ContentLookupError
from npc_importer.core.logging import get_logger
from npc_importer.models.documents import TargetItemDocument, item_adapter, item_list_adapter
from npc_importer.resolution.sources import LibraryEntry


logger = get_logger(__name__)


class JsonPackLibrary:
    """Content library reading item documents from JSON files.

    Files are read once, on the first listing or fetch.
    """

    def __init__(self, directory: Path | str, *, name: str | None = None) -> None:
        self.directory = Path(directory)
        self._name = name or self.directory.name
        self._documents: dict[str, TargetItemDocument] | None = None

    @property
    def name(self) -> str:
        return self._name

    async def list_entries(self) -> list[LibraryEntry]:
        documents = await self._load()
        return [
            LibraryEntry(entry_id=entry_id, name=document.name, kind=document.kind)
            for entry_id, document in documents.items()
        ]

    async def fetch(self, entry_id: str) -> TargetItemDocument:
        documents = await self._load()
        try:
            return documents[entry_id]
        except KeyError as exc:
            raise ContentLookupError(
                "No such pack entry",
                library=self._name,
                entry_id=entry_id,
            ) from exc

    async def _load(self) -> dict[str, TargetItemDocument]:
        if self._documents is None:
            self._documents = await asyncio.to_thread(self._read_directory)
        return self._documents

    def _read_directory(self) -> dict[str, TargetItemDocument]:
        """Parse every pack file.

        Raises:
            ContentLookupError: If the directory or any file cannot be read
                or parsed.
        """
        if not self.directory.is_dir():
            raise ContentLookupError(
                f"Pack directory not found: {self.directory}",
                library=self._name,
            )

        documents: dict[str, TargetItemDocument] = {}
        for path in sorted(self.directory.glob("*.json")):
            for position, document in enumerate(self._read_file(path)):
                entry_id = document.id or f"{path.stem}.{position}"
                documents[entry_id] = document

        logger.debug("Pack loaded", library=self._name, documents=len(documents))
        return documents

    def _read_file(self, path: Path) -> list[TargetItemDocument]:
        try:
            raw = json.loads(path.read_text(encoding="utf-8"))
            if isinstance(raw, list):
                return item_list_adapter.validate_python(raw)
            return [item_adapter.validate_python(raw)]
        except (OSError, json.JSONDecodeError, ValidationError) as exc:
            raise ContentLookupError(
                f"Invalid pack file {path.name}: {exc}",
                library=self._name,
                details={"path": str(path)},
            ) from exc


__all__ = ["JsonPackLibrary"]
