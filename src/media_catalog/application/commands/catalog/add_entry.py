"""Add entry command."""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..base import Command, CommandResult
from ....domain.catalog.entities import EntryDraft
from ....exceptions import MediaCatalogError
from .base import CatalogCommandHandler, CatalogEntryEvent

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True, kw_only=True)
class AddEntryCommand(Command):
    """Command to add a new entry to the catalog."""

    draft: EntryDraft
    now: Optional[datetime] = None


class AddEntryCommandHandler(CatalogCommandHandler):
    """Handler for adding entries to the catalog."""

    async def handle(self, command: AddEntryCommand) -> CommandResult:
        """Handle the add entry command."""
        try:
            entry = command.draft.commit(now=command.now)

            await self.entry_repo.save(entry)

            event = CatalogEntryEvent("EntryAdded", entry, creator=entry.creator)
            return await self._complete(
                command,
                event,
                message=f"Added entry: {entry.title}",
                result_data={
                    "entry_id": entry.id,
                    "title": entry.title,
                    "entry": entry,
                },
            )

        except MediaCatalogError as e:
            logger.error("Failed to add entry: %s", e)
            return CommandResult.failed(command, "Failed to add entry", str(e))

    def can_handle(self, command_type: type) -> bool:
        """Check if this handler can handle the given command type."""
        return command_type == AddEntryCommand
