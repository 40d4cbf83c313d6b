"""Remove entry command."""

from dataclasses import dataclass

from ..base import Command, CommandResult
from .base import CatalogCommandHandler, CatalogEntryEvent


@dataclass(frozen=True, slots=True, kw_only=True)
class RemoveEntryCommand(Command):
    """Command to delete an entry from the catalog."""

    entry_id: str


class RemoveEntryCommandHandler(CatalogCommandHandler):
    """Handler for removing entries from the catalog."""

    async def handle(self, command: RemoveEntryCommand) -> CommandResult:
        """Handle the remove entry command."""
        entry = await self.entry_repo.find_by_id(command.entry_id)
        if entry is None:
            return CommandResult.failed(
                command,
                "Entry not found",
                f"Entry ID not found: {command.entry_id}",
            )

        await self.entry_repo.delete(entry.id)

        event = CatalogEntryEvent("EntryRemoved", entry)
        return await self._complete(
            command,
            event,
            message=f"Removed entry: {entry.title}",
            result_data={"entry_id": entry.id, "title": entry.title},
        )

    def can_handle(self, command_type: type) -> bool:
        """Check if this handler can handle the given command type."""
        return command_type == RemoveEntryCommand
