"""Entity resolution: name normalization, collaborator interfaces, content index."""

from __future__ import annotations

from npc_importer.resolution.content_index import (
    ContentIndex,
    ContentIndexEntry,
    FoundItem,
    IndexSnapshot,
    LibraryIndex,
)
from npc_importer.resolution.normalizer import normalize
from npc_importer.resolution.sources import (
    ActorStore,
    ContentLibrary,
    LibraryEntry,
    WorkingSet,
)


__all__ = [
    "normalize",
    "LibraryEntry",
    "WorkingSet",
    "ContentLibrary",
    "ActorStore",
    "ContentIndexEntry",
    "LibraryIndex",
    "IndexSnapshot",
    "FoundItem",
    "ContentIndex",
]
