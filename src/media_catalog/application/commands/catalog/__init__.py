"""Catalog commands."""

from .base import CatalogCommandHandler, CatalogEntryEvent
from .add_entry import AddEntryCommand, AddEntryCommandHandler
from .update_entry import UpdateEntryCommand, UpdateEntryCommandHandler
from .remove_entry import RemoveEntryCommand, RemoveEntryCommandHandler
from .toggle_favorite import ToggleFavoriteCommand, ToggleFavoriteCommandHandler

__all__ = [
    "CatalogCommandHandler",
    "CatalogEntryEvent",
    "AddEntryCommand",
    "AddEntryCommandHandler",
    "UpdateEntryCommand",
    "UpdateEntryCommandHandler",
    "RemoveEntryCommand",
    "RemoveEntryCommandHandler",
    "ToggleFavoriteCommand",
    "ToggleFavoriteCommandHandler",
]
