"""Shared plumbing for catalog command handlers."""

import logging
from typing import Any, Dict, Optional

from ...events import DomainEvent, EventBus
from ...queries import QueryCache
from ..base import Command, CommandHandler, CommandResult
from ....domain.catalog.entities import CatalogEntry
from ....domain.catalog.repositories import CatalogEntryRepository

logger = logging.getLogger(__name__)


class CatalogEntryEvent(DomainEvent):
    """Event raised when a catalog entry changes."""

    def __init__(self, event_type: str, entry: CatalogEntry, **extra: Any):
        super().__init__(
            aggregate_id=entry.id,
            aggregate_type="CatalogEntry",
            event_type=event_type,
            event_data={
                "title": entry.title,
                "kind": entry.kind.value,
                "updated_at": entry.updated_at.isoformat(),
                **extra,
            },
        )


class CatalogCommandHandler(CommandHandler):
    """Base for handlers that mutate the catalog store.

    After a successful mutation the handler publishes its event (when an
    event bus is wired) and drops cached query results (when a cache is
    attached) so later reads see the new state.
    """

    def __init__(
        self,
        entry_repo: CatalogEntryRepository,
        event_bus: Optional[EventBus] = None,
        query_cache: Optional[QueryCache] = None,
    ):
        self.entry_repo = entry_repo
        self.event_bus = event_bus
        self.query_cache = query_cache

    async def _complete(
        self,
        command: Command,
        event: DomainEvent,
        message: str,
        result_data: Dict[str, Any],
    ) -> CommandResult:
        if self.query_cache is not None:
            await self.query_cache.invalidate()

        if self.event_bus:
            await self.event_bus.publish(event)

        logger.info(message)
        return CommandResult(
            success=True,
            command_id=command.command_id,
            message=message,
            result_data=result_data,
            events=[event] if self.event_bus else [],
        )
