"""Multi-source content index.

Answers "does an item with this name already exist?" across the live working
set and the configured content libraries, in that order. Matching is exact on
the normalized name (see :mod:`npc_importer.resolution.normalizer`) plus the
item kind.

Library listings are expensive, so they are indexed once and cached for the
lifetime of the index object; the working set is live state and is queried on
every lookup.

Example:
    >>> index = ContentIndex(working_set, [jutsu_pack, weapon_pack])
    >>> found = await index.find("Fire Release: Fireball Jutsu", ItemKind.SPELL)
    >>> found.origin if found else "created"
    'jutsu-pack'
"""

from __future__ import annotations

import asyncio
from collections.abc import Sequence
from dataclasses import dataclass

from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from npc_importer.core.config import IndexSettings
from npc_importer.core.constants import WORKING_SET_ORIGIN
from npc_importer.core.exceptions import ConfigurationError, ContentLookupError
from npc_importer.core.logging import get_logger
from npc_importer.models.documents import TargetItemDocument
from npc_importer.models.enums import ItemKind
from npc_importer.resolution.normalizer import normalize
from npc_importer.resolution.sources import ContentLibrary, WorkingSet


logger = get_logger(__name__)

_RETRYABLE_FETCH_ERRORS = (ContentLookupError, OSError, TimeoutError)


# =============================================================================
# Index Data
# =============================================================================


@dataclass(frozen=True)
class ContentIndexEntry:
    """One indexed library document."""

    normalized_name: str
    name: str
    kind: ItemKind
    origin: str
    entry_id: str


@dataclass(frozen=True)
class LibraryIndex:
    """Entries of one library, in listing order."""

    library: str
    entries: tuple[ContentIndexEntry, ...]

    def lookup(self, key: str, kind: ItemKind | None = None) -> ContentIndexEntry | None:
        """Return the first entry matching a normalized key and kind."""
        for entry in self.entries:
            if entry.normalized_name == key and (kind is None or entry.kind == kind):
                return entry
        return None


@dataclass(frozen=True)
class IndexSnapshot:
    """Complete index of every library that could be listed.

    Attributes:
        libraries: Library indexes in configured order.
        unavailable: Names of libraries whose listing failed.
    """

    libraries: tuple[LibraryIndex, ...]
    unavailable: tuple[str, ...] = ()

    @property
    def entry_count(self) -> int:
        return sum(len(library.entries) for library in self.libraries)


@dataclass(frozen=True)
class FoundItem:
    """A matching document and where it was found.

    Attributes:
        document: The document as stored, identity included.
        origin: "working-set" or the library name.
    """

    document: TargetItemDocument
    origin: str


# =============================================================================
# Content Index
# =============================================================================


class ContentIndex:
    """Cached, single-flight index over the working set and content libraries.

    Attributes:
        working_set: Live item collection checked first on every lookup.
        libraries: Content libraries in lookup order.
    """

    def __init__(
        self,
        working_set: WorkingSet,
        libraries: Sequence[ContentLibrary] = (),
        *,
        fetch_attempts: int = 2,
        fetch_backoff: float = 1.0,
    ) -> None:
        """Initialize the index. Nothing is listed until the first lookup.

        Args:
            working_set: Live item collection.
            libraries: Content libraries, searched in this order.
            fetch_attempts: Attempts per document fetch before it counts as a miss.
            fetch_backoff: Maximum wait in seconds between fetch attempts.

        Raises:
            ConfigurationError: If two libraries share a name.
        """
        self.working_set = working_set
        self.libraries = tuple(libraries)
        self._libraries_by_name = {library.name: library for library in self.libraries}
        if len(self._libraries_by_name) != len(self.libraries):
            raise ConfigurationError(
                "Content library names must be unique",
                config_key="libraries",
                details={"libraries": [library.name for library in self.libraries]},
            )
        self._fetch_attempts = fetch_attempts
        self._fetch_backoff = fetch_backoff
        self._snapshot: IndexSnapshot | None = None
        self._build_task: asyncio.Task[IndexSnapshot] | None = None
        self._generation = 0

    @classmethod
    def from_settings(
        cls,
        working_set: WorkingSet,
        libraries: Sequence[ContentLibrary],
        settings: IndexSettings,
    ) -> "ContentIndex":
        return cls(
            working_set,
            libraries,
            fetch_attempts=settings.fetch_attempts,
            fetch_backoff=settings.fetch_backoff_seconds,
        )

    @property
    def snapshot(self) -> IndexSnapshot | None:
        """The cached snapshot, or None before the first build."""
        return self._snapshot

    # -------------------------------------------------------------------------
    # Building
    # -------------------------------------------------------------------------

    async def build(self) -> IndexSnapshot:
        """Return the cached snapshot, building it on first use.

        Concurrent first callers share one in-flight build, so each library
        is listed once. A build that was in flight when :meth:`invalidate`
        ran still answers its callers but is not cached.

        Returns:
            The library snapshot.
        """
        if self._snapshot is not None:
            return self._snapshot

        generation = self._generation
        if self._build_task is None:
            self._build_task = asyncio.ensure_future(self._build_snapshot())
        task = self._build_task
        try:
            snapshot = await asyncio.shield(task)
        finally:
            if self._build_task is task and task.done():
                self._build_task = None

        if generation != self._generation:
            return snapshot
        if self._snapshot is None:
            self._snapshot = snapshot
        return self._snapshot

    def invalidate(self) -> None:
        """Drop the cached snapshot; the next lookup rebuilds it."""
        self._generation += 1
        self._snapshot = None
        self._build_task = None

    async def rebuild(self) -> IndexSnapshot:
        """Build a fresh snapshot and swap it in once complete.

        Lookups keep using the previous snapshot until the new one is ready.
        """
        snapshot = await self._build_snapshot()
        self._snapshot = snapshot
        return snapshot

    async def _build_snapshot(self) -> IndexSnapshot:
        results = await asyncio.gather(
            *(self._index_library(library) for library in self.libraries),
            return_exceptions=True,
        )

        indexes: list[LibraryIndex] = []
        unavailable: list[str] = []
        for library, result in zip(self.libraries, results):
            if isinstance(result, asyncio.CancelledError):
                raise result
            if isinstance(result, BaseException):
                logger.warning(
                    "Content library unavailable, skipping",
                    library=library.name,
                    error=str(result),
                )
                unavailable.append(library.name)
                continue
            indexes.append(result)

        snapshot = IndexSnapshot(libraries=tuple(indexes), unavailable=tuple(unavailable))
        logger.info(
            "Content index built",
            libraries=len(snapshot.libraries),
            unavailable=len(snapshot.unavailable),
            entries=snapshot.entry_count,
        )
        return snapshot

    async def _index_library(self, library: ContentLibrary) -> LibraryIndex:
        listing = await library.list_entries()
        entries = tuple(
            ContentIndexEntry(
                normalized_name=normalize(entry.name),
                name=entry.name,
                kind=entry.kind,
                origin=library.name,
                entry_id=entry.entry_id,
            )
            for entry in listing
        )
        logger.debug("Library indexed", library=library.name, entries=len(entries))
        return LibraryIndex(library=library.name, entries=entries)

    # -------------------------------------------------------------------------
    # Lookup
    # -------------------------------------------------------------------------

    async def find(self, name: str | None, kind: ItemKind | None = None) -> FoundItem | None:
        """Find an existing item by name.

        The working set is scanned first, then each library index in
        configured order. A library hit whose fetch keeps failing counts as
        a miss for that library and the scan moves on.

        Args:
            name: Display name; compared after normalization.
            kind: Restrict matches to one item kind.

        Returns:
            The first match with its origin, or None.
        """
        key = normalize(name)
        if not key:
            return None

        for item in await self.working_set.list_items(kind):
            if normalize(item.name) == key and (kind is None or item.kind == kind):
                logger.debug("Found in working set", name=name, kind=kind)
                return FoundItem(document=item, origin=WORKING_SET_ORIGIN)

        snapshot = await self.build()
        for library_index in snapshot.libraries:
            entry = library_index.lookup(key, kind)
            if entry is None:
                continue
            document = await self._fetch(entry)
            if document is not None:
                logger.debug("Found in library", name=name, library=entry.origin)
                return FoundItem(document=document, origin=entry.origin)

        return None

    async def _fetch(self, entry: ContentIndexEntry) -> TargetItemDocument | None:
        """Fetch a library hit, retrying transient errors.

        Any error left once retries are exhausted, transient or not, makes
        the hit a miss.
        """
        library = self._libraries_by_name[entry.origin]
        try:
            async for attempt in AsyncRetrying(
                retry=retry_if_exception_type(_RETRYABLE_FETCH_ERRORS),
                stop=stop_after_attempt(self._fetch_attempts),
                wait=wait_exponential(multiplier=0.25, max=self._fetch_backoff),
                reraise=True,
            ):
                with attempt:
                    return await library.fetch(entry.entry_id)
        except Exception as exc:
            logger.warning(
                "Library fetch failed, treating as miss",
                library=entry.origin,
                entry_id=entry.entry_id,
                name=entry.name,
                error_type=type(exc).__name__,
                error=str(exc),
            )
        return None

    def stats(self) -> dict[str, int]:
        """Entry counts per indexed library; empty before the first build."""
        if self._snapshot is None:
            return {}
        return {library.library: len(library.entries) for library in self._snapshot.libraries}


__all__ = [
    "ContentIndexEntry",
    "LibraryIndex",
    "IndexSnapshot",
    "FoundItem",
    "ContentIndex",
]
