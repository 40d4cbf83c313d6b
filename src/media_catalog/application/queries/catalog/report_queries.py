"""Yearly report queries."""

from dataclasses import dataclass
from typing import List, Optional

from ...queries.base import Query, QueryHandler
from ....domain.catalog.repositories import CatalogEntryRepository
from ....domain.reporting import (
    HOURS_PER_ENTRY,
    TOP_RATED_LIMIT,
    YearlyReport,
    available_years,
    compute_report,
    default_report_year,
)


@dataclass(frozen=True, slots=True, kw_only=True)
class GetYearlyReportQuery(Query):
    """Query to compute the yearly report.

    When ``year`` is None the most recent year with entries is used.
    """

    year: Optional[int] = None


@dataclass(frozen=True, slots=True, kw_only=True)
class GetAvailableYearsQuery(Query):
    """Query to get the years a report can be generated for."""


class GetYearlyReportHandler(QueryHandler[GetYearlyReportQuery, YearlyReport]):
    """Handler that snapshots the store and runs the report aggregation."""

    def __init__(
        self,
        entry_repo: CatalogEntryRepository,
        top_rated_limit: int = TOP_RATED_LIMIT,
        hours_per_entry: int = HOURS_PER_ENTRY,
    ):
        self.entry_repo = entry_repo
        self.top_rated_limit = top_rated_limit
        self.hours_per_entry = hours_per_entry

    async def handle(self, query: GetYearlyReportQuery) -> YearlyReport:
        """Handle the yearly report query."""
        entries = await self.entry_repo.query_all()
        year = query.year if query.year is not None else default_report_year(entries)
        return compute_report(
            entries,
            year,
            top_rated_limit=self.top_rated_limit,
            hours_per_entry=self.hours_per_entry,
        )

    def can_handle(self, query_type: type) -> bool:
        """Check if this handler can handle the given query type."""
        return query_type == GetYearlyReportQuery

    def get_cache_key(self, query: GetYearlyReportQuery) -> Optional[str]:
        """Generate cache key for the yearly report."""
        if query.year is None:
            return None
        return f"yearly_report:{query.year}"


class GetAvailableYearsHandler(QueryHandler[GetAvailableYearsQuery, List[int]]):
    """Handler for the report year picker."""

    def __init__(self, entry_repo: CatalogEntryRepository):
        self.entry_repo = entry_repo

    async def handle(self, query: GetAvailableYearsQuery) -> List[int]:
        """Handle the available years query."""
        return available_years(await self.entry_repo.query_all())

    def can_handle(self, query_type: type) -> bool:
        """Check if this handler can handle the given query type."""
        return query_type == GetAvailableYearsQuery

    def get_cache_key(self, query: GetAvailableYearsQuery) -> Optional[str]:
        return "available_years"
