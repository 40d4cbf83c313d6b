"""Catalog Context Repository Interfaces.

This module defines the repository interface for the Catalog bounded context.
Repositories provide abstraction over data storage and retrieval.
"""

from abc import ABC, abstractmethod
from typing import AsyncIterator, List, Optional

from .entities import CatalogEntry


class CatalogEntryRepository(ABC):
    """Repository for CatalogEntry entities."""

    @abstractmethod
    async def save(self, entry: CatalogEntry) -> None:
        """Insert a new entry."""
        pass

    @abstractmethod
    async def update(self, entry: CatalogEntry) -> None:
        """Replace the stored version of an existing entry."""
        pass

    @abstractmethod
    async def delete(self, entry_id: str) -> bool:
        """Delete an entry. Returns False if it did not exist."""
        pass

    @abstractmethod
    async def find_by_id(self, entry_id: str) -> Optional[CatalogEntry]:
        """Find an entry by its ID."""
        pass

    @abstractmethod
    def find_all(self, limit: Optional[int] = None, offset: int = 0) -> AsyncIterator[CatalogEntry]:
        """Iterate over all entries with optional pagination."""
        pass

    @abstractmethod
    async def count(self) -> int:
        """Get total count of entries."""
        pass

    async def query_all(self) -> List[CatalogEntry]:
        """Take a read snapshot of every stored entry."""
        return [entry async for entry in self.find_all()]
