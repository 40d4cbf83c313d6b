"""Tests for library browsing filters and search."""

from datetime import date, datetime

from media_catalog.domain.catalog import (
    FilterScope,
    LibraryFilter,
    MediaKind,
    filter_entries,
    matches_search,
    sidebar_years,
    sort_by_recent,
)


class TestLibraryFilter:
    """Test sidebar selections."""

    def test_all_matches_everything(self, make_entry):
        assert LibraryFilter.all().matches(make_entry())
        assert LibraryFilter.all().scope == FilterScope.ALL

    def test_favorites(self, make_entry):
        favorites = LibraryFilter.favorites()
        assert favorites.matches(make_entry(is_favorite=True))
        assert not favorites.matches(make_entry())

    def test_kind(self, make_entry):
        movies = LibraryFilter.for_kind(MediaKind.MOVIE)
        assert movies.matches(make_entry(kind=MediaKind.MOVIE))
        assert not movies.matches(make_entry(kind=MediaKind.BOOK))

    def test_year_uses_release_date_only(self, make_entry):
        """Entries without a release date never match a year."""
        selection = LibraryFilter.for_year(2024)
        assert selection.matches(make_entry(release_date=date(2024, 2, 2)))
        assert not selection.matches(make_entry(release_date=date(2023, 2, 2)))
        assert not selection.matches(make_entry(created_at=datetime(2024, 1, 1)))

    def test_labels(self):
        assert LibraryFilter.all().label == "All Media"
        assert LibraryFilter.favorites().label == "Favorites"
        assert LibraryFilter.for_kind(MediaKind.PODCAST).label == "Podcast"
        assert LibraryFilter.for_year(1999).label == "1999"


class TestSearchAndOrdering:
    """Test search matching and recency ordering."""

    def test_search_fields(self, make_entry):
        entry = make_entry(title="Dune", creator="Frank Herbert", platform="Kindle", tags=("sci-fi",))
        assert matches_search(entry, "dune")
        assert matches_search(entry, "HERBERT")
        assert matches_search(entry, "kind")
        assert matches_search(entry, "Sci")
        assert not matches_search(entry, "tolkien")

    def test_blank_search_matches(self, make_entry):
        assert matches_search(make_entry(), "   ")

    def test_sort_by_recent(self, make_entry):
        old = make_entry("old", updated_at=datetime(2024, 3, 2))
        new = make_entry("new", updated_at=datetime(2024, 9, 2))
        assert sort_by_recent([old, new]) == [new, old]

    def test_filter_entries_combines_filter_and_search(self, make_entry):
        a = make_entry("Dune", is_favorite=True, updated_at=datetime(2024, 4, 1))
        b = make_entry("Dune Messiah", is_favorite=True, updated_at=datetime(2024, 5, 1))
        c = make_entry("Dune Musical")
        d = make_entry("Emma", is_favorite=True)

        result = filter_entries([a, b, c, d], LibraryFilter.favorites(), "dune")
        assert result == [b, a]

    def test_filter_entries_defaults_to_all(self, make_entry):
        entries = [make_entry("a"), make_entry("b")]
        assert len(filter_entries(entries)) == 2

    def test_sidebar_years(self, make_entry):
        entries = [
            make_entry(release_date=date(2020, 1, 1)),
            make_entry(release_date=date(2024, 1, 1)),
            make_entry(release_date=date(2020, 6, 1)),
            make_entry(created_at=datetime(2022, 1, 1)),
        ]
        assert sidebar_years(entries) == [2024, 2020]
