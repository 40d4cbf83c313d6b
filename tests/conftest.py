"""Shared fixtures for media catalog tests."""

from datetime import date, datetime

import pytest

from media_catalog.domain.catalog import CatalogEntry, MediaKind


def build_entry(
    title: str = "Untitled",
    kind: MediaKind = MediaKind.BOOK,
    created_at: datetime = datetime(2024, 3, 1, 12, 0),
    updated_at: datetime = None,
    release_date: date = None,
    **overrides,
) -> CatalogEntry:
    """Create an entry with fixed timestamps."""
    return CatalogEntry(
        title=title,
        kind=kind,
        created_at=created_at,
        updated_at=updated_at or created_at,
        release_date=release_date,
        **overrides,
    )


@pytest.fixture
def make_entry():
    """Factory fixture for catalog entries."""
    return build_entry
