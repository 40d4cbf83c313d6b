"""Media Catalog

A personal catalog for books, movies, albums, blog posts, videos and podcasts,
with library browsing and a yearly highlights report.
"""

__version__ = "0.1.0"

from .domain.catalog import (
    CatalogEntry,
    EntryDraft,
    LibraryFilter,
    MediaKind,
    MediaStatus,
)
from .domain.reporting import (
    YearlyReport,
    available_years,
    compute_report,
    default_report_year,
    entry_year,
)
from .domain.layout import flow_layout

__all__ = [
    # Entities
    "CatalogEntry",
    "EntryDraft",

    # Types and enums
    "MediaKind",
    "MediaStatus",
    "LibraryFilter",

    # Reporting
    "YearlyReport",
    "compute_report",
    "available_years",
    "default_report_year",
    "entry_year",

    # Layout
    "flow_layout",
]
