"""Reporting - yearly highlights computed from catalog snapshots."""

from .yearly_report import (
    HOURS_PER_ENTRY,
    TOP_RATED_LIMIT,
    YearlyReport,
    available_years,
    compute_report,
    default_report_year,
    entry_year,
)

__all__ = [
    "HOURS_PER_ENTRY",
    "TOP_RATED_LIMIT",
    "YearlyReport",
    "available_years",
    "compute_report",
    "default_report_year",
    "entry_year",
]
