"""Custom exceptions for media catalog."""


class MediaCatalogError(Exception):
    """Base exception for media catalog errors."""
    pass


class ValidationError(MediaCatalogError):
    """Raised when an entry draft fails validation."""
    pass


class EntryNotFoundError(MediaCatalogError):
    """Raised when a catalog entry cannot be found."""

    def __init__(self, entry_id: str):
        super().__init__(f"Catalog entry not found: {entry_id}")
        self.entry_id = entry_id


class StorageError(MediaCatalogError):
    """Raised when the catalog store cannot be read or written."""
    pass


class ExportError(MediaCatalogError):
    """Raised when a report cannot be exported."""
    pass


class ConfigurationError(MediaCatalogError):
    """Raised when there's an error in configuration."""
    pass
