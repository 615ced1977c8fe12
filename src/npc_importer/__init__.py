"""npc_importer - Generated NPC records to n5eb store documents.

Converts loosely-typed NPC records (stats, jutsu, weapons, special
abilities) into typed actor and item documents, reusing items that already
exist in the working set or a content library.

Example:
    >>> from npc_importer import build_batch_importer, InMemoryWorkingSet, InMemoryActorStore
    >>>
    >>> store = InMemoryActorStore()
    >>> batch = build_batch_importer(InMemoryWorkingSet(), [JsonPackLibrary("packs/jutsu")], store)
    >>> result = await batch.import_batch(load_records_file("npcs.json"))
    >>> print(result.summary())

Modules:
    core: Configuration, logging, and base exceptions.
    models: Pydantic V2 source records and target documents; report types.
    resolution: Name normalization, collaborator interfaces, content index.
    extraction: Free-text field extractors for jutsu and weapons.
    assets: Icon tables and resolution chains.
    conversion: Actor and item document construction.
    importer: Per-NPC state machine, batch driver, verification.
    storage: In-memory and JSON pack collaborators.
"""

from __future__ import annotations

# Core
from npc_importer.core.config import Settings, get_settings
from npc_importer.core.exceptions import NpcImporterError
from npc_importer.core.logging import configure_logging, get_logger, setup_logging

# Models
from npc_importer.models import (
    BatchResult,
    ImportReportEntry,
    NPCImportResult,
    SourceNPCRecord,
    TargetActorDocument,
    TargetItemDocument,
)

# Engine
from npc_importer.assets import IconResolver, IconTables
from npc_importer.conversion import NPCConverter
from npc_importer.importer import (
    BatchImporter,
    NPCImporter,
    build_batch_importer,
    load_records_file,
    verify_import,
)
from npc_importer.resolution import ContentIndex, normalize

# Collaborators
from npc_importer.storage import (
    InMemoryActorStore,
    InMemoryLibrary,
    InMemoryWorkingSet,
    JsonPackLibrary,
)


__version__ = "0.1.0"
__all__ = [
    # Version info
    "__version__",
    # Core
    "NpcImporterError",
    "Settings",
    "get_settings",
    "configure_logging",
    "setup_logging",
    "get_logger",
    # Models
    "SourceNPCRecord",
    "TargetActorDocument",
    "TargetItemDocument",
    "ImportReportEntry",
    "NPCImportResult",
    "BatchResult",
    # Engine
    "normalize",
    "ContentIndex",
    "IconTables",
    "IconResolver",
    "NPCConverter",
    "NPCImporter",
    "BatchImporter",
    "build_batch_importer",
    "load_records_file",
    "verify_import",
    # Collaborators
    "InMemoryWorkingSet",
    "InMemoryLibrary",
    "InMemoryActorStore",
    "JsonPackLibrary",
]
