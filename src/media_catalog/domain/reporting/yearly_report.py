"""Yearly highlights report.

Pure aggregation over a snapshot of catalog entries: counts, per-kind
breakdown and the top-rated picks for one year. Nothing here performs I/O
and every input produces a report, possibly an empty one.
"""

from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from ..catalog.entities import CatalogEntry
from ..catalog.value_objects import MediaKind

TOP_RATED_LIMIT = 3

# Flat placeholder rate, not a measurement.
HOURS_PER_ENTRY = 2


def entry_year(entry: CatalogEntry) -> int:
    """Year an entry is reported under: release year, else creation year."""
    if entry.release_date is not None:
        return entry.release_date.year
    return entry.created_at.year


@dataclass(frozen=True, slots=True)
class YearlyReport:
    """Summary of the catalog for a single year."""

    year: int
    total_count: int = 0
    favorite_count: int = 0
    kind_breakdown: Tuple[Tuple[MediaKind, int], ...] = ()
    top_rated: Tuple[CatalogEntry, ...] = ()
    hours_per_entry: int = HOURS_PER_ENTRY

    @property
    def is_empty(self) -> bool:
        return self.total_count == 0

    @property
    def estimated_hours(self) -> int:
        """Rough time estimate at a flat rate per entry."""
        return self.total_count * self.hours_per_entry

    def count_for(self, kind: MediaKind) -> int:
        """Get the count for one kind (zero if absent from the breakdown)."""
        return dict(self.kind_breakdown).get(kind, 0)

    def to_dict(self) -> Dict[str, Any]:
        """Convert report to a JSON-friendly dictionary."""
        return {
            "year": self.year,
            "total_count": self.total_count,
            "favorite_count": self.favorite_count,
            "estimated_hours": self.estimated_hours,
            "kind_breakdown": [
                {"kind": kind.value, "display_name": kind.display_name, "count": count}
                for kind, count in self.kind_breakdown
            ],
            "top_rated": [
                {
                    "id": entry.id,
                    "title": entry.title,
                    "creator": entry.display_creator,
                    "kind": entry.kind.value,
                    "rating": entry.rating,
                    "updated_at": entry.updated_at.isoformat(),
                }
                for entry in self.top_rated
            ],
        }


def _rank_key(entry: CatalogEntry):
    return (entry.rating, entry.updated_at)


def compute_report(
    entries: Iterable[CatalogEntry],
    year: int,
    top_rated_limit: int = TOP_RATED_LIMIT,
    hours_per_entry: int = HOURS_PER_ENTRY,
) -> YearlyReport:
    """Compute the yearly report for ``year`` from a snapshot of entries.

    Args:
        entries: Any iterable of entries, in any order.
        year: Target year. A year with no entries yields an empty report.
        top_rated_limit: Maximum number of top-rated picks.
        hours_per_entry: Rate used for the estimated-hours figure.

    Returns:
        YearlyReport: Counts, kind breakdown in canonical order and up to
        ``top_rated_limit`` entries rated above zero, best first with ties
        going to the most recently updated.
    """
    selected = [entry for entry in entries if entry_year(entry) == year]

    favorite_count = sum(1 for entry in selected if entry.is_favorite)

    kind_counts: Dict[MediaKind, int] = {}
    for entry in selected:
        kind_counts[entry.kind] = kind_counts.get(entry.kind, 0) + 1
    kind_breakdown = tuple(
        (kind, kind_counts[kind]) for kind in MediaKind if kind_counts.get(kind, 0) > 0
    )

    rated = [entry for entry in selected if entry.rating > 0]
    top_rated = tuple(sorted(rated, key=_rank_key, reverse=True)[:max(top_rated_limit, 0)])

    return YearlyReport(
        year=year,
        total_count=len(selected),
        favorite_count=favorite_count,
        kind_breakdown=kind_breakdown,
        top_rated=top_rated,
        hours_per_entry=hours_per_entry,
    )


def available_years(entries: Sequence[CatalogEntry], today: Optional[date] = None) -> List[int]:
    """Years that have at least one entry, newest first.

    Falls back to the current calendar year when the catalog is empty.
    """
    years = sorted({entry_year(entry) for entry in entries}, reverse=True)
    if not years:
        return [(today or date.today()).year]
    return years


def default_report_year(entries: Sequence[CatalogEntry], today: Optional[date] = None) -> int:
    """The year a report opens on: the most recent year with entries."""
    return available_years(entries, today=today)[0]
