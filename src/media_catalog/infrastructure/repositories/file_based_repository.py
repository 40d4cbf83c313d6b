"""
File-based Repository Implementations.

This module provides a JSON-file catalog store. The whole catalog lives in a
single ``entries.json`` mapping entry IDs to serialized entries.
"""

import asyncio
import json
import logging
from pathlib import Path
from typing import Any, AsyncIterator, Dict, Optional

import aiofiles

from ...domain.catalog.entities import CatalogEntry
from ...domain.catalog.repositories import CatalogEntryRepository
from ...exceptions import EntryNotFoundError, StorageError

logger = logging.getLogger(__name__)

ENTRIES_FILENAME = "entries.json"


class FileBasedCatalogEntryRepository(CatalogEntryRepository):
    """File-based implementation of CatalogEntryRepository using JSON storage."""

    def __init__(self, storage_dir: Path):
        self.storage_dir = Path(storage_dir)
        self._entries_file = self.storage_dir / ENTRIES_FILENAME
        self._cache: Optional[Dict[str, Dict[str, Any]]] = None
        self._lock = asyncio.Lock()

    @property
    def entries_file(self) -> Path:
        return self._entries_file

    async def _load_data(self) -> Dict[str, Dict[str, Any]]:
        """Load the raw entry dictionaries from disk."""
        if self._cache is not None:
            return self._cache

        if not self._entries_file.exists():
            self._cache = {}
            return self._cache

        try:
            async with aiofiles.open(self._entries_file, "r", encoding="utf-8") as f:
                content = await f.read()
        except OSError as e:
            raise StorageError(f"Cannot read catalog file {self._entries_file}: {e}") from e

        try:
            data = json.loads(content) if content.strip() else {}
        except json.JSONDecodeError as e:
            raise StorageError(f"Catalog file {self._entries_file} is not valid JSON: {e}") from e

        if not isinstance(data, dict):
            raise StorageError(f"Catalog file {self._entries_file} must contain a JSON object")

        logger.debug("Loaded %d entries from %s", len(data), self._entries_file)
        self._cache = data
        return self._cache

    async def _save_data(self, data: Dict[str, Dict[str, Any]]) -> None:
        """Write the raw entry dictionaries to disk."""
        self.storage_dir.mkdir(parents=True, exist_ok=True)
        tmp_file = self._entries_file.with_suffix(".json.tmp")
        try:
            async with aiofiles.open(tmp_file, "w", encoding="utf-8") as f:
                await f.write(json.dumps(data, indent=2, ensure_ascii=False))
            tmp_file.replace(self._entries_file)
        except OSError as e:
            raise StorageError(f"Cannot write catalog file {self._entries_file}: {e}") from e
        self._cache = data

    async def save(self, entry: CatalogEntry) -> None:
        """Insert a new entry."""
        async with self._lock:
            data = dict(await self._load_data())
            if entry.id in data:
                raise StorageError(f"Entry already exists: {entry.id}")
            data[entry.id] = entry.to_dict()
            await self._save_data(data)
        logger.info("Saved entry %s (%s)", entry.id, entry.title)

    async def update(self, entry: CatalogEntry) -> None:
        """Replace the stored version of an entry."""
        async with self._lock:
            data = dict(await self._load_data())
            if entry.id not in data:
                raise EntryNotFoundError(entry.id)
            data[entry.id] = entry.to_dict()
            await self._save_data(data)
        logger.info("Updated entry %s (%s)", entry.id, entry.title)

    async def delete(self, entry_id: str) -> bool:
        """Delete an entry."""
        async with self._lock:
            data = dict(await self._load_data())
            if entry_id not in data:
                return False
            del data[entry_id]
            await self._save_data(data)
        logger.info("Deleted entry %s", entry_id)
        return True

    async def find_by_id(self, entry_id: str) -> Optional[CatalogEntry]:
        """Find an entry by its ID."""
        data = await self._load_data()
        entry_dict = data.get(entry_id)
        if entry_dict is None:
            return None
        return self._dict_to_entry(entry_dict)

    async def find_all(self, limit: Optional[int] = None, offset: int = 0) -> AsyncIterator[CatalogEntry]:
        """Iterate over all entries with optional pagination."""
        data = await self._load_data()
        entry_dicts = list(data.values())[offset:]
        if limit:
            entry_dicts = entry_dicts[:limit]

        for entry_dict in entry_dicts:
            entry = self._dict_to_entry(entry_dict)
            if entry:
                yield entry

    async def count(self) -> int:
        """Count the entries that decode; malformed records are not counted."""
        data = await self._load_data()
        return sum(1 for entry_dict in data.values() if self._dict_to_entry(entry_dict) is not None)

    def _dict_to_entry(self, entry_dict: Dict[str, Any]) -> Optional[CatalogEntry]:
        """Convert dictionary to CatalogEntry, skipping malformed records."""
        try:
            return CatalogEntry.from_dict(entry_dict)
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            record_id = entry_dict.get("id", "?") if isinstance(entry_dict, dict) else "?"
            logger.warning("Skipping malformed catalog record %s: %s", record_id, e)
            return None
