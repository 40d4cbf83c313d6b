"""Toggle favorite command."""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..base import Command, CommandResult
from .base import CatalogCommandHandler, CatalogEntryEvent


@dataclass(frozen=True, slots=True, kw_only=True)
class ToggleFavoriteCommand(Command):
    """Command to flip the favorite flag of an entry."""

    entry_id: str
    now: Optional[datetime] = None


class ToggleFavoriteCommandHandler(CatalogCommandHandler):
    """Handler for marking and unmarking favorites."""

    async def handle(self, command: ToggleFavoriteCommand) -> CommandResult:
        """Handle the toggle favorite command."""
        entry = await self.entry_repo.find_by_id(command.entry_id)
        if entry is None:
            return CommandResult.failed(
                command,
                "Entry not found",
                f"Entry ID not found: {command.entry_id}",
            )

        updated = entry.toggled_favorite(now=command.now)
        await self.entry_repo.update(updated)

        verb = "Marked" if updated.is_favorite else "Unmarked"
        event = CatalogEntryEvent("FavoriteToggled", updated, is_favorite=updated.is_favorite)
        return await self._complete(
            command,
            event,
            message=f"{verb} favorite: {updated.title}",
            result_data={
                "entry_id": updated.id,
                "is_favorite": updated.is_favorite,
                "entry": updated,
            },
        )

    def can_handle(self, command_type: type) -> bool:
        """Check if this handler can handle the given command type."""
        return command_type == ToggleFavoriteCommand
