"""CQRS wiring for the media library.

Builds the command, query and event buses around one catalog store and
exposes small coroutine helpers used by the CLI.
"""

import logging
from typing import List, Optional

from .commands import CommandBus, CommandResult
from .commands.catalog import (
    AddEntryCommand,
    AddEntryCommandHandler,
    RemoveEntryCommand,
    RemoveEntryCommandHandler,
    ToggleFavoriteCommand,
    ToggleFavoriteCommandHandler,
    UpdateEntryCommand,
    UpdateEntryCommandHandler,
)
from .events import EventBus, EventRecorder, EventStore
from .queries import QueryBus, QueryCache
from .queries.catalog import (
    GetAvailableYearsHandler,
    GetAvailableYearsQuery,
    GetEntryByIdHandler,
    GetEntryByIdQuery,
    GetSidebarYearsHandler,
    GetSidebarYearsQuery,
    GetYearlyReportHandler,
    GetYearlyReportQuery,
    ListEntriesHandler,
    ListEntriesQuery,
)
from ..domain.catalog.entities import CatalogEntry, EntryDraft
from ..domain.catalog.repositories import CatalogEntryRepository
from ..domain.catalog.services import LibraryFilter
from ..domain.reporting import HOURS_PER_ENTRY, TOP_RATED_LIMIT, YearlyReport
from ..exceptions import MediaCatalogError

logger = logging.getLogger(__name__)

CATALOG_EVENT_TYPES = ("EntryAdded", "EntryUpdated", "EntryRemoved", "FavoriteToggled")


class MediaLibrary:
    """CQRS-based media library service."""

    def __init__(
        self,
        entry_repo: CatalogEntryRepository,
        top_rated_limit: int = TOP_RATED_LIMIT,
        hours_per_entry: int = HOURS_PER_ENTRY,
        use_cache: bool = True,
    ):
        self.entry_repo = entry_repo
        self.event_bus = EventBus()
        self.event_store = EventStore()
        self.query_cache = QueryCache() if use_cache else None

        self.command_bus = CommandBus()
        self.query_bus = QueryBus()
        if self.query_cache is not None:
            self.query_bus.set_cache(self.query_cache)

        self._register_command_handlers()
        self._register_query_handlers(top_rated_limit, hours_per_entry)
        self._register_event_handlers()

    def _register_command_handlers(self) -> None:
        """Register all command handlers."""
        args = (self.entry_repo, self.event_bus, self.query_cache)
        self.command_bus.register(AddEntryCommand, AddEntryCommandHandler(*args))
        self.command_bus.register(UpdateEntryCommand, UpdateEntryCommandHandler(*args))
        self.command_bus.register(RemoveEntryCommand, RemoveEntryCommandHandler(*args))
        self.command_bus.register(ToggleFavoriteCommand, ToggleFavoriteCommandHandler(*args))

    def _register_query_handlers(self, top_rated_limit: int, hours_per_entry: int) -> None:
        """Register all query handlers."""
        self.query_bus.register(GetEntryByIdQuery, GetEntryByIdHandler(self.entry_repo))
        self.query_bus.register(ListEntriesQuery, ListEntriesHandler(self.entry_repo))
        self.query_bus.register(GetSidebarYearsQuery, GetSidebarYearsHandler(self.entry_repo))
        self.query_bus.register(
            GetYearlyReportQuery,
            GetYearlyReportHandler(self.entry_repo, top_rated_limit, hours_per_entry),
        )
        self.query_bus.register(GetAvailableYearsQuery, GetAvailableYearsHandler(self.entry_repo))

    def _register_event_handlers(self) -> None:
        """Record every catalog event in the in-memory event store."""
        recorder = EventRecorder(self.event_store)
        for event_type in CATALOG_EVENT_TYPES:
            self.event_bus.subscribe(event_type, recorder)

    # Commands

    async def add_entry(self, draft: EntryDraft) -> CommandResult:
        return await self.command_bus.dispatch(AddEntryCommand(draft=draft))

    async def update_entry(self, entry_id: str, draft: EntryDraft) -> CommandResult:
        return await self.command_bus.dispatch(UpdateEntryCommand(entry_id=entry_id, draft=draft))

    async def remove_entry(self, entry_id: str) -> CommandResult:
        return await self.command_bus.dispatch(RemoveEntryCommand(entry_id=entry_id))

    async def toggle_favorite(self, entry_id: str) -> CommandResult:
        return await self.command_bus.dispatch(ToggleFavoriteCommand(entry_id=entry_id))

    # Queries

    async def _data(self, query):
        result = await self.query_bus.dispatch(query)
        if not result.success:
            raise MediaCatalogError("; ".join(result.errors))
        return result.data

    async def get_entry(self, entry_id: str) -> Optional[CatalogEntry]:
        return await self._data(GetEntryByIdQuery(entry_id=entry_id))

    async def list_entries(
        self,
        library_filter: Optional[LibraryFilter] = None,
        search_text: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> List[CatalogEntry]:
        return await self._data(ListEntriesQuery(
            library_filter=library_filter or LibraryFilter.all(),
            search_text=search_text,
            limit=limit,
        ))

    async def sidebar_years(self) -> List[int]:
        return await self._data(GetSidebarYearsQuery())

    async def yearly_report(self, year: Optional[int] = None) -> YearlyReport:
        return await self._data(GetYearlyReportQuery(year=year))

    async def available_years(self) -> List[int]:
        return await self._data(GetAvailableYearsQuery())

    async def resolve_entry_id(self, prefix: str) -> Optional[str]:
        """Expand a unique ID prefix into a full entry ID."""
        entry = await self.get_entry(prefix)
        if entry is not None:
            return entry.id
        matches = [e.id for e in await self.entry_repo.query_all() if e.id.startswith(prefix)]
        if len(matches) == 1:
            return matches[0]
        if len(matches) > 1:
            logger.debug("Ambiguous ID prefix %s matches %d entries", prefix, len(matches))
        return None
