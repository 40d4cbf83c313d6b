"""Catalog queries."""

from .entry_queries import (
    GetEntryByIdQuery,
    GetEntryByIdHandler,
    ListEntriesQuery,
    ListEntriesHandler,
    GetSidebarYearsQuery,
    GetSidebarYearsHandler,
)
from .report_queries import (
    GetYearlyReportQuery,
    GetYearlyReportHandler,
    GetAvailableYearsQuery,
    GetAvailableYearsHandler,
)

__all__ = [
    "GetEntryByIdQuery",
    "GetEntryByIdHandler",
    "ListEntriesQuery",
    "ListEntriesHandler",
    "GetSidebarYearsQuery",
    "GetSidebarYearsHandler",
    "GetYearlyReportQuery",
    "GetYearlyReportHandler",
    "GetAvailableYearsQuery",
    "GetAvailableYearsHandler",
]
