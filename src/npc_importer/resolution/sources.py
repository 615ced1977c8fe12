"""Collaborator interfaces the importer runs against.

The importer never talks to a concrete store. It is given a working set
(items already defined in the world), read-only content libraries
(compendium packs) and an actor store, all async. Reference
implementations live in :mod:`npc_importer.storage`.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from npc_importer.models.documents import TargetActorDocument, TargetItemDocument
from npc_importer.models.enums import ItemKind


@dataclass(frozen=True)
class LibraryEntry:
    """Lightweight listing of one library document.

    Attributes:
        entry_id: Handle used to fetch the full document.
        name: Display name.
        kind: Item type of the document.
    """

    entry_id: str
    name: str
    kind: ItemKind


@runtime_checkable
class WorkingSet(Protocol):
    """Live, mutable collection of items already defined in the world."""

    async def list_items(self, kind: ItemKind | None = None) -> list[TargetItemDocument]:
        """Return current items, optionally of one kind."""
        ...


@runtime_checkable
class ContentLibrary(Protocol):
    """Named, read-only collection of item documents.

    Both methods may raise :class:`~npc_importer.core.exceptions.ContentLookupError`.
    """

    @property
    def name(self) -> str: ...

    async def list_entries(self) -> list[LibraryEntry]: ...

    async def fetch(self, entry_id: str) -> TargetItemDocument: ...


@runtime_checkable
class ActorStore(Protocol):
    """Persistence for imported actors, their items and folders."""

    async def find_actor(self, name: str, kind: str) -> str | None:
        """Return the handle of an actor with exactly this name and kind."""
        ...

    async def create_actor(self, document: TargetActorDocument) -> str: ...

    async def attach_items(
        self,
        actor_handle: str,
        items: Sequence[TargetItemDocument],
    ) -> list[str]:
        """Embed all items on the actor in one operation; returns item handles."""
        ...

    async def get_or_create_folder(self, name: str) -> str: ...

    async def assign_folder(self, actor_handle: str, folder_id: str) -> None: ...


__all__ = [
    "LibraryEntry",
    "WorkingSet",
    "ContentLibrary",
    "ActorStore",
]
