"""
Catalog Context - Managing the media catalog.

This bounded context is responsible for:
- Defining catalog entries and their editable drafts
- Normalising ratings, tags, kinds and statuses
- Library browsing filters
- The repository interface used by the stores
"""

from .entities import CatalogEntry, EntryDraft, UNKNOWN_CREATOR
from .value_objects import (
    MediaKind,
    MediaStatus,
    clamp_rating,
    normalize_tags,
    parse_media_kind,
    parse_media_status,
    parse_tags,
)
from .repositories import CatalogEntryRepository
from .services import (
    FilterScope,
    LibraryFilter,
    filter_entries,
    matches_search,
    sidebar_years,
    sort_by_recent,
)

__all__ = [
    # Entities
    "CatalogEntry",
    "EntryDraft",
    "UNKNOWN_CREATOR",
    # Value Objects
    "MediaKind",
    "MediaStatus",
    "clamp_rating",
    "normalize_tags",
    "parse_media_kind",
    "parse_media_status",
    "parse_tags",
    # Repositories
    "CatalogEntryRepository",
    # Services
    "FilterScope",
    "LibraryFilter",
    "filter_entries",
    "matches_search",
    "sidebar_years",
    "sort_by_recent",
]
