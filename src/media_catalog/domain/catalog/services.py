"""Catalog Context Domain Services.

Library browsing rules: the sidebar filters (all, favorites, per kind, per
release year), free-text search and the recently-updated ordering.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional

from .entities import CatalogEntry
from .value_objects import MediaKind


class FilterScope(Enum):
    """Which slice of the library a filter selects."""
    ALL = "all"
    FAVORITES = "favorites"
    KIND = "kind"
    YEAR = "year"


@dataclass(frozen=True, slots=True)
class LibraryFilter:
    """A sidebar selection over the library."""

    scope: FilterScope = FilterScope.ALL
    kind: Optional[MediaKind] = None
    year: Optional[int] = None

    @classmethod
    def all(cls) -> "LibraryFilter":
        return cls()

    @classmethod
    def favorites(cls) -> "LibraryFilter":
        return cls(scope=FilterScope.FAVORITES)

    @classmethod
    def for_kind(cls, kind: MediaKind) -> "LibraryFilter":
        return cls(scope=FilterScope.KIND, kind=kind)

    @classmethod
    def for_year(cls, year: int) -> "LibraryFilter":
        return cls(scope=FilterScope.YEAR, year=year)

    def matches(self, entry: CatalogEntry) -> bool:
        """Check whether an entry belongs to this selection.

        Year selection uses the release year only; entries without a
        release date are never listed under a year.
        """
        if self.scope is FilterScope.FAVORITES:
            return entry.is_favorite
        if self.scope is FilterScope.KIND:
            return entry.kind is self.kind
        if self.scope is FilterScope.YEAR:
            return entry.year is not None and entry.year == self.year
        return True

    @property
    def label(self) -> str:
        if self.scope is FilterScope.FAVORITES:
            return "Favorites"
        if self.scope is FilterScope.KIND and self.kind is not None:
            return self.kind.display_name
        if self.scope is FilterScope.YEAR:
            return str(self.year)
        return "All Media"


def sort_by_recent(entries: Iterable[CatalogEntry]) -> List[CatalogEntry]:
    """Order entries by most recently updated first."""
    return sorted(entries, key=lambda e: e.updated_at, reverse=True)


def matches_search(entry: CatalogEntry, text: str) -> bool:
    """Case-insensitive match against title, creator, platform and tags."""
    needle = text.strip().lower()
    if not needle:
        return True
    haystack = [entry.title, entry.creator, entry.platform, *entry.tags]
    return any(needle in value.lower() for value in haystack)


def filter_entries(
    entries: Iterable[CatalogEntry],
    library_filter: Optional[LibraryFilter] = None,
    search_text: Optional[str] = None,
) -> List[CatalogEntry]:
    """Apply a sidebar filter and optional search, most recent first."""
    selection = library_filter or LibraryFilter.all()
    selected = (e for e in entries if selection.matches(e))
    if search_text:
        selected = (e for e in selected if matches_search(e, search_text))
    return sort_by_recent(selected)


def sidebar_years(entries: Iterable[CatalogEntry]) -> List[int]:
    """Distinct release years, newest first."""
    return sorted({e.year for e in entries if e.year is not None}, reverse=True)
