"""Data models for the media catalog."""

from .config import (
    CatalogConfig,
    DisplayConfig,
    ReportConfig,
    create_default_config,
    load_config,
    save_config,
)

__all__ = [
    "CatalogConfig",
    "DisplayConfig",
    "ReportConfig",
    "create_default_config",
    "load_config",
    "save_config",
]
