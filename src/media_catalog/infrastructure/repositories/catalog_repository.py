"""
Catalog Repository Implementations.

In-memory catalog store for tests, previews and one-shot sessions.
"""

import logging
from typing import AsyncIterator, Dict, Iterable, Optional

from ...domain.catalog.entities import CatalogEntry
from ...domain.catalog.repositories import CatalogEntryRepository
from ...exceptions import EntryNotFoundError, StorageError

logger = logging.getLogger(__name__)


class InMemoryCatalogEntryRepository(CatalogEntryRepository):
    """In-memory implementation of CatalogEntryRepository for testing and development."""

    def __init__(self, entries: Optional[Iterable[CatalogEntry]] = None):
        self._entries: Dict[str, CatalogEntry] = {}
        for entry in entries or ():
            self._entries[entry.id] = entry

    async def save(self, entry: CatalogEntry) -> None:
        """Insert a new entry."""
        if entry.id in self._entries:
            raise StorageError(f"Entry already exists: {entry.id}")
        self._entries[entry.id] = entry
        logger.debug("Saved entry %s", entry.id)

    async def update(self, entry: CatalogEntry) -> None:
        """Replace the stored version of an entry."""
        if entry.id not in self._entries:
            raise EntryNotFoundError(entry.id)
        self._entries[entry.id] = entry
        logger.debug("Updated entry %s", entry.id)

    async def delete(self, entry_id: str) -> bool:
        """Delete an entry."""
        return self._entries.pop(entry_id, None) is not None

    async def find_by_id(self, entry_id: str) -> Optional[CatalogEntry]:
        """Find an entry by its ID."""
        return self._entries.get(entry_id)

    async def find_all(self, limit: Optional[int] = None, offset: int = 0) -> AsyncIterator[CatalogEntry]:
        """Iterate over all entries with optional pagination."""
        entries = list(self._entries.values())[offset:]
        if limit:
            entries = entries[:limit]

        for entry in entries:
            yield entry

    async def count(self) -> int:
        """Get total count of entries."""
        return len(self._entries)
