"""Entry-related queries."""

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from ...queries.base import Query, QueryHandler
from ....domain.catalog.entities import CatalogEntry
from ....domain.catalog.repositories import CatalogEntryRepository
from ....domain.catalog.services import LibraryFilter, filter_entries, sidebar_years

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True, kw_only=True)
class GetEntryByIdQuery(Query):
    """Query to get an entry by ID."""

    entry_id: str


@dataclass(frozen=True, slots=True, kw_only=True)
class ListEntriesQuery(Query):
    """Query to list entries for a sidebar selection."""

    library_filter: LibraryFilter = field(default_factory=LibraryFilter.all)
    search_text: Optional[str] = None
    limit: Optional[int] = None
    offset: int = 0


@dataclass(frozen=True, slots=True, kw_only=True)
class GetSidebarYearsQuery(Query):
    """Query to get the release years shown in the sidebar."""


class GetEntryByIdHandler(QueryHandler[GetEntryByIdQuery, Optional[CatalogEntry]]):
    """Handler for getting an entry by ID."""

    def __init__(self, entry_repo: CatalogEntryRepository):
        self.entry_repo = entry_repo

    async def handle(self, query: GetEntryByIdQuery) -> Optional[CatalogEntry]:
        """Handle the get entry by ID query."""
        return await self.entry_repo.find_by_id(query.entry_id)

    def can_handle(self, query_type: type) -> bool:
        """Check if this handler can handle the given query type."""
        return query_type == GetEntryByIdQuery

    def get_cache_key(self, query: GetEntryByIdQuery) -> Optional[str]:
        return f"entry:{query.entry_id}"


class ListEntriesHandler(QueryHandler[ListEntriesQuery, List[CatalogEntry]]):
    """Handler for listing entries, most recently updated first."""

    def __init__(self, entry_repo: CatalogEntryRepository):
        self.entry_repo = entry_repo

    async def handle(self, query: ListEntriesQuery) -> List[CatalogEntry]:
        """Handle the list entries query."""
        entries = await self.entry_repo.query_all()
        selected = filter_entries(entries, query.library_filter, query.search_text)
        logger.debug("%s: %d of %d entries", query.library_filter.label, len(selected), len(entries))

        selected = selected[query.offset:]
        if query.limit:
            selected = selected[:query.limit]
        return selected

    def can_handle(self, query_type: type) -> bool:
        """Check if this handler can handle the given query type."""
        return query_type == ListEntriesQuery

    def get_cache_key(self, query: ListEntriesQuery) -> Optional[str]:
        selection = query.library_filter
        kind = selection.kind.value if selection.kind else ""
        return (
            f"entries:{selection.scope.value}:{kind}:{selection.year}:"
            f"{query.search_text or ''}:{query.limit}:{query.offset}"
        )


class GetSidebarYearsHandler(QueryHandler[GetSidebarYearsQuery, List[int]]):
    """Handler for the sidebar's release years."""

    def __init__(self, entry_repo: CatalogEntryRepository):
        self.entry_repo = entry_repo

    async def handle(self, query: GetSidebarYearsQuery) -> List[int]:
        return sidebar_years(await self.entry_repo.query_all())

    def can_handle(self, query_type: type) -> bool:
        return query_type == GetSidebarYearsQuery

    def get_cache_key(self, query: GetSidebarYearsQuery) -> Optional[str]:
        return "sidebar_years"
