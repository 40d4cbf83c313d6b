"""Update entry command."""

import logging
from dataclasses import dataclass, fields
from datetime import datetime
from typing import List, Optional

from ..base import Command, CommandResult
from ....domain.catalog.entities import CatalogEntry, EntryDraft
from ....exceptions import MediaCatalogError
from .base import CatalogCommandHandler, CatalogEntryEvent

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True, kw_only=True)
class UpdateEntryCommand(Command):
    """Command to commit an edited draft onto an existing entry."""

    entry_id: str
    draft: EntryDraft
    now: Optional[datetime] = None


def _changed_fields(before: CatalogEntry, after: CatalogEntry) -> List[str]:
    ignored = {"updated_at"}
    return [
        f.name for f in fields(CatalogEntry)
        if f.name not in ignored and getattr(before, f.name) != getattr(after, f.name)
    ]


class UpdateEntryCommandHandler(CatalogCommandHandler):
    """Handler for updating catalog entries."""

    async def handle(self, command: UpdateEntryCommand) -> CommandResult:
        """Handle the update entry command."""
        existing = await self.entry_repo.find_by_id(command.entry_id)
        if existing is None:
            return CommandResult.failed(
                command,
                "Entry not found",
                f"Entry ID not found: {command.entry_id}",
            )

        try:
            updated = command.draft.apply_to(existing, now=command.now)
            await self.entry_repo.update(updated)
        except MediaCatalogError as e:
            logger.error("Failed to update entry %s: %s", command.entry_id, e)
            return CommandResult.failed(command, "Failed to update entry", str(e))

        changed = _changed_fields(existing, updated)
        event = CatalogEntryEvent("EntryUpdated", updated, updated_fields=changed)
        return await self._complete(
            command,
            event,
            message=f"Updated entry: {updated.title}",
            result_data={
                "entry_id": updated.id,
                "updated_fields": changed,
                "entry": updated,
            },
        )

    def can_handle(self, command_type: type) -> bool:
        """Check if this handler can handle the given command type."""
        return command_type == UpdateEntryCommand
