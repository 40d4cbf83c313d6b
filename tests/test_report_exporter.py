"""Tests for yearly report export."""

import csv
import json
from datetime import date

import pytest

from media_catalog.domain.catalog import MediaKind
from media_catalog.domain.reporting import YearlyReport, compute_report
from media_catalog.exceptions import ExportError
from media_catalog.infrastructure.export import ReportExporter, default_report_filename


@pytest.fixture
def report(make_entry):
    entries = [
        make_entry("Dune", release_date=date(2024, 1, 1), rating=5, creator="Frank Herbert"),
        make_entry("Arrival", kind=MediaKind.MOVIE, release_date=date(2024, 2, 1), rating=4, is_favorite=True),
        make_entry("Podcast Ep", kind=MediaKind.PODCAST, release_date=date(2024, 3, 1)),
    ]
    return compute_report(entries, 2024)


class TestReportExporter:
    """Test exporting reports in each format."""

    def test_default_filename(self):
        assert default_report_filename(2024) == "Yearly_Report_2024.json"
        assert default_report_filename(2024, "csv") == "Yearly_Report_2024.csv"

    def test_unknown_format(self):
        with pytest.raises(ExportError):
            ReportExporter("pdf")

    def test_json_export(self, report, tmp_path):
        path = ReportExporter().export(report, tmp_path / "out.json")
        data = json.loads(path.read_text(encoding="utf-8"))

        assert data["title"] == "2024 Year in Review - Digital Library"
        assert data["year"] == 2024
        assert data["total_count"] == 3
        assert data["favorite_count"] == 1
        assert data["estimated_hours"] == 6
        assert [row["kind"] for row in data["kind_breakdown"]] == ["book", "movie", "podcast"]
        assert [item["title"] for item in data["top_rated"]] == ["Dune", "Arrival"]
        assert data["top_rated"][1]["creator"] == "Unknown Creator"

    def test_directory_target_uses_default_name(self, report, tmp_path):
        path = ReportExporter("txt").export(report, tmp_path)
        assert path == tmp_path / "Yearly_Report_2024.txt"

    def test_csv_export(self, report, tmp_path):
        path = ReportExporter().export(report, tmp_path / "out.csv", export_format="csv")
        with open(path, newline="", encoding="utf-8") as f:
            rows = list(csv.reader(f))

        assert rows[0] == ["section", "key", "value"]
        assert ["summary", "total_count", "3"] in rows
        assert ["kind_breakdown", "movie", "1"] in rows
        assert rows[-1][0] == "top_rated"

    def test_text_export(self, report, tmp_path):
        path = ReportExporter("txt").export(report, tmp_path / "out.txt")
        text = path.read_text(encoding="utf-8")

        assert text.startswith("2024 YEAR IN REVIEW - DIGITAL LIBRARY")
        assert "Total Items: 3" in text
        assert "Favorite Items: 1" in text
        assert "Estimated Hours: 6h" in text
        assert "1. Dune - Frank Herbert *****" in text

    def test_empty_report_rejected(self, tmp_path):
        with pytest.raises(ExportError, match="No entries to export for 2019"):
            ReportExporter().export(YearlyReport(year=2019), tmp_path / "x.json")
        assert not (tmp_path / "x.json").exists()

    def test_unwritable_target(self, report, tmp_path):
        with pytest.raises(ExportError, match="Failed to save report"):
            ReportExporter().export(report, tmp_path / "missing" / "out.json")
