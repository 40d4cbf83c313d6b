"""
Repository Implementations - Infrastructure Layer

This package contains catalog store implementations,
following the Repository pattern from Domain-Driven Design.
"""

from .catalog_repository import InMemoryCatalogEntryRepository
from .file_based_repository import FileBasedCatalogEntryRepository

__all__ = [
    "InMemoryCatalogEntryRepository",
    "FileBasedCatalogEntryRepository",
]
