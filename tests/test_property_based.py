"""Property-based tests for the yearly report and catalog value objects.

Uses Hypothesis to generate catalogs and verify the invariants that must hold
for every snapshot and every target year.
"""

from __future__ import annotations

from datetime import date, datetime

from hypothesis import given, settings, strategies as st

from media_catalog.domain.catalog import (
    CatalogEntry,
    MediaKind,
    clamp_rating,
    parse_tags,
)
from media_catalog.domain.reporting import available_years, compute_report, entry_year


timestamps = st.datetimes(min_value=datetime(2015, 1, 1), max_value=datetime(2026, 12, 31))

entries_strategy = st.builds(
    CatalogEntry,
    title=st.text(min_size=1, max_size=20),
    kind=st.sampled_from(list(MediaKind)),
    created_at=timestamps,
    updated_at=timestamps,
    release_date=st.one_of(st.none(), st.dates(min_value=date(2015, 1, 1), max_value=date(2026, 12, 31))),
    rating=st.integers(min_value=-3, max_value=8),
    is_favorite=st.booleans(),
)

catalogs = st.lists(entries_strategy, max_size=30)
years = st.integers(min_value=2013, max_value=2028)


# ============================================================================
# Yearly report invariants
# ============================================================================

@given(catalogs, years)
def test_total_count_matches_entries_in_year(entries: list, year: int) -> None:
    """total_count equals the number of entries whose derived year matches."""
    report = compute_report(entries, year)
    assert report.total_count == sum(1 for e in entries if entry_year(e) == year)


@given(catalogs, years)
def test_favorites_never_exceed_total(entries: list, year: int) -> None:
    """favorite_count is bounded by total_count."""
    report = compute_report(entries, year)
    assert 0 <= report.favorite_count <= report.total_count


@given(catalogs, years)
def test_breakdown_sums_to_total(entries: list, year: int) -> None:
    """Breakdown counts add up to the total and contain no zeros."""
    report = compute_report(entries, year)
    assert sum(count for _, count in report.kind_breakdown) == report.total_count
    assert all(count > 0 for _, count in report.kind_breakdown)


@given(catalogs, years)
def test_breakdown_follows_canonical_order(entries: list, year: int) -> None:
    """Kinds appear in enum order."""
    report = compute_report(entries, year)
    order = list(MediaKind)
    positions = [order.index(kind) for kind, _ in report.kind_breakdown]
    assert positions == sorted(positions)


@given(catalogs, years)
def test_top_rated_length(entries: list, year: int) -> None:
    """top_rated holds min(3, rated entries in year) items."""
    report = compute_report(entries, year)
    rated = [e for e in entries if entry_year(e) == year and e.rating > 0]
    assert len(report.top_rated) == min(3, len(rated))


@given(catalogs, years)
def test_top_rated_sorted(entries: list, year: int) -> None:
    """Consecutive picks are ordered by rating, then most recent update."""
    top = compute_report(entries, year).top_rated
    for a, b in zip(top, top[1:]):
        assert a.rating > b.rating or (a.rating == b.rating and a.updated_at >= b.updated_at)


@given(catalogs, years)
def test_report_is_idempotent(entries: list, year: int) -> None:
    """Same inputs give equal reports."""
    assert compute_report(entries, year) == compute_report(entries, year)


@settings(max_examples=50)
@given(catalogs)
def test_available_years_descending_and_complete(entries: list) -> None:
    """Every derived year is offered exactly once, newest first."""
    offered = available_years(entries, today=date(2026, 10, 18))
    assert offered == sorted(set(offered), reverse=True)
    if entries:
        assert set(offered) == {entry_year(e) for e in entries}
    else:
        assert offered == [2026]


# ============================================================================
# Value object invariants
# ============================================================================

@given(st.integers(min_value=-1000, max_value=1000))
def test_clamp_rating_in_range(value: int) -> None:
    """Ratings are always within 0-5."""
    assert 0 <= clamp_rating(value) <= 5


@given(st.integers(min_value=-1000, max_value=1000))
def test_entry_rating_always_clamped(value: int) -> None:
    """Entries never store an out-of-range rating."""
    entry = CatalogEntry(title="x", rating=value)
    assert entry.rating == clamp_rating(value)


@given(st.text())
def test_parsed_tags_are_trimmed_and_non_empty(text: str) -> None:
    """Tag parsing never yields blank or padded tags."""
    for tag in parse_tags(text):
        assert tag
        assert tag == tag.strip()
        assert "," not in tag and "\n" not in tag
