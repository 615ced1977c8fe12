"""In-memory collaborators.

Reference implementations of the working set, content library and actor
store interfaces. They keep call counters and optional failure switches so
the importer's caching and failure handling can be observed.
"""

from __future__ import annotations

import asyncio
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from uuid import uuid4

from npc_importer.core.exceptions import ContentLookupError
from npc_importer.core.logging import get_logger
from npc_importer.models.documents import TargetActorDocument, TargetItemDocument
from npc_importer.models.enums import ItemKind
from npc_importer.resolution.sources import LibraryEntry


logger = get_logger(__name__)


def _new_id() -> str:
    return uuid4().hex[:16]


def _with_identity(document: TargetItemDocument) -> TargetItemDocument:
    if document.id:
        return document
    return document.model_copy(update={"id": _new_id()})


# =============================================================================
# Working Set
# =============================================================================


class InMemoryWorkingSet:
    """Mutable list of world items.

    Attributes:
        list_calls: Number of ``list_items`` calls.
    """

    def __init__(self, items: Iterable[TargetItemDocument] = ()) -> None:
        self._items: list[TargetItemDocument] = [_with_identity(item) for item in items]
        self.list_calls = 0

    def add(self, item: TargetItemDocument) -> TargetItemDocument:
        """Add an item, assigning an identity if it has none."""
        stored = _with_identity(item)
        self._items.append(stored)
        return stored

    async def list_items(self, kind: ItemKind | None = None) -> list[TargetItemDocument]:
        self.list_calls += 1
        return [item for item in self._items if kind is None or item.kind == kind]


# =============================================================================
# Content Library
# =============================================================================


class InMemoryLibrary:
    """Read-only named collection of item documents.

    Attributes:
        list_calls: Number of ``list_entries`` calls.
        fetch_calls: Number of ``fetch`` calls, failed ones included.
    """

    def __init__(
        self,
        name: str,
        documents: Iterable[TargetItemDocument] = (),
        *,
        fail_listing: bool = False,
        fetch_failures: int = 0,
        list_delay: float = 0.0,
    ) -> None:
        """Initialize the library.

        Args:
            name: Library name, reported as the origin of found items.
            documents: Library contents, in listing order.
            fail_listing: Make every ``list_entries`` call raise.
            fetch_failures: Number of ``fetch`` calls that raise before
                fetches start succeeding.
            list_delay: Seconds ``list_entries`` waits before answering.
        """
        self._name = name
        self._documents = {doc.id: doc for doc in map(_with_identity, documents)}
        self.fail_listing = fail_listing
        self.fetch_failures = fetch_failures
        self.list_delay = list_delay
        self.list_calls = 0
        self.fetch_calls = 0

    @property
    def name(self) -> str:
        return self._name

    async def list_entries(self) -> list[LibraryEntry]:
        self.list_calls += 1
        await asyncio.sleep(self.list_delay)
        if self.fail_listing:
            raise ContentLookupError("Library listing unavailable", library=self._name)
        return [
            LibraryEntry(entry_id=entry_id, name=doc.name, kind=doc.kind)
            for entry_id, doc in self._documents.items()
        ]

    async def fetch(self, entry_id: str) -> TargetItemDocument:
        self.fetch_calls += 1
        if self.fetch_failures > 0:
            self.fetch_failures -= 1
            raise ContentLookupError("Library fetch failed", library=self._name, entry_id=entry_id)
        try:
            return self._documents[entry_id]
        except KeyError as exc:
            raise ContentLookupError(
                "No such library entry",
                library=self._name,
                entry_id=entry_id,
            ) from exc


# =============================================================================
# Actor Store
# =============================================================================


@dataclass
class StoredActor:
    """An actor in the in-memory store with its embedded items."""

    handle: str
    document: TargetActorDocument
    items: list[TargetItemDocument] = field(default_factory=list)
    folder_id: str | None = None


class InMemoryActorStore:
    """Actor store keeping everything in dictionaries.

    Attributes:
        actors: Stored actors by handle, in creation order.
        folders: Folder ids by name.
        fail_create: Actor names whose creation raises.
        fail_attach: Make every ``attach_items`` call raise.
        attach_calls: Number of ``attach_items`` calls.
    """

    def __init__(
        self,
        *,
        fail_create: Iterable[str] = (),
        fail_attach: bool = False,
        fail_folders: bool = False,
    ) -> None:
        self.actors: dict[str, StoredActor] = {}
        self.folders: dict[str, str] = {}
        self.fail_create = set(fail_create)
        self.fail_attach = fail_attach
        self.fail_folders = fail_folders
        self.attach_calls = 0

    def actor_named(self, name: str) -> StoredActor | None:
        return next((actor for actor in self.actors.values() if actor.document.name == name), None)

    async def find_actor(self, name: str, kind: str) -> str | None:
        for actor in self.actors.values():
            if actor.document.name == name and actor.document.type == kind:
                return actor.handle
        return None

    async def create_actor(self, document: TargetActorDocument) -> str:
        if document.name in self.fail_create:
            raise RuntimeError(f"Store rejected actor {document.name!r}")
        handle = _new_id()
        self.actors[handle] = StoredActor(handle=handle, document=document)
        logger.debug("Actor created", actor=handle, name=document.name)
        return handle

    async def attach_items(
        self,
        actor_handle: str,
        items: Sequence[TargetItemDocument],
    ) -> list[str]:
        self.attach_calls += 1
        if self.fail_attach:
            raise RuntimeError("Store rejected embedded items")
        actor = self.actors[actor_handle]
        stored = [item.model_copy(update={"id": _new_id()}) for item in items]
        actor.items.extend(stored)
        return [item.id for item in stored if item.id is not None]

    async def get_or_create_folder(self, name: str) -> str:
        if self.fail_folders:
            raise RuntimeError(f"Store rejected folder {name!r}")
        if name not in self.folders:
            self.folders[name] = _new_id()
        return self.folders[name]

    async def assign_folder(self, actor_handle: str, folder_id: str) -> None:
        self.actors[actor_handle].folder_id = folder_id


__all__ = [
    "InMemoryWorkingSet",
    "InMemoryLibrary",
    "StoredActor",
    "InMemoryActorStore",
]
