"""Reference collaborators: in-memory stores and a JSON pack library."""

from __future__ import annotations

from npc_importer.storage.memory import (
    InMemoryActorStore,
    InMemoryLibrary,
    InMemoryWorkingSet,
    StoredActor,
)
from npc_importer.storage.packs import JsonPackLibrary


__all__ = [
    "InMemoryWorkingSet",
    "InMemoryLibrary",
    "InMemoryActorStore",
    "StoredActor",
    "JsonPackLibrary",
]
