"""Tests for the command line interface."""

import json

import pytest
from click.testing import CliRunner

from media_catalog.cli import cli, render_tag_lines
from media_catalog.infrastructure.repositories.file_based_repository import ENTRIES_FILENAME


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def library_dir(tmp_path):
    return tmp_path / "library"


def invoke(runner, library_dir, *args, **kwargs):
    return runner.invoke(cli, ["--library", str(library_dir), *args], **kwargs)


def stored_entries(library_dir):
    return list(json.loads((library_dir / ENTRIES_FILENAME).read_text(encoding="utf-8")).values())


class TestRenderTagLines:
    """Test terminal tag wrapping."""

    def test_wraps_to_width(self):
        lines = render_tag_lines(["alpha", "beta", "gamma"], max_width=15)
        assert lines == ["[alpha] [beta]", "[gamma]"]

    def test_oversized_tag_on_own_line(self):
        lines = render_tag_lines(["a", "much-too-long-for-the-line", "b"], max_width=10)
        assert lines == ["[a]", "[much-too-long-for-the-line]", "[b]"]

    def test_no_tags(self):
        assert render_tag_lines([], max_width=10) == []


class TestCatalogCommands:
    """Test adding, listing, editing and deleting entries."""

    def test_add_and_list(self, runner, library_dir):
        result = invoke(
            runner, library_dir, "add", "Dune",
            "--creator", "Frank Herbert", "--release-date", "1965-08-01",
            "--rating", "5", "--tags", "sci-fi, classic",
        )
        assert result.exit_code == 0, result.output
        assert "Added" in result.output

        (entry,) = stored_entries(library_dir)
        assert entry["title"] == "Dune"
        assert entry["kind"] == "book"
        assert entry["release_date"] == "1965-08-01"
        assert entry["tags"] == ["sci-fi", "classic"]

        listed = invoke(runner, library_dir, "list")
        assert listed.exit_code == 0
        assert "Dune" in listed.output

    def test_add_blank_title_fails(self, runner, library_dir):
        result = invoke(runner, library_dir, "add", "   ")
        assert result.exit_code == 1
        assert "Title must not be empty" in result.output

    def test_list_empty(self, runner, library_dir):
        result = invoke(runner, library_dir, "list")
        assert result.exit_code == 0
        assert "No entries found" in result.output

    def test_list_favorites(self, runner, library_dir):
        invoke(runner, library_dir, "add", "Dune")
        invoke(runner, library_dir, "add", "Arrival", "--kind", "movie", "--favorite")

        result = invoke(runner, library_dir, "list", "--favorites")
        assert "Arrival" in result.output
        assert "Dune" not in result.output

    def test_edit_only_changes_given_options(self, runner, library_dir):
        invoke(runner, library_dir, "add", "Dune", "--creator", "Frank Herbert")
        entry_id = stored_entries(library_dir)[0]["id"]

        result = invoke(runner, library_dir, "edit", entry_id[:8], "--rating", "4", "--status", "completed")
        assert result.exit_code == 0, result.output
        assert "Updated" in result.output

        (entry,) = stored_entries(library_dir)
        assert entry["rating"] == 4
        assert entry["status"] == "completed"
        assert entry["creator"] == "Frank Herbert"

    def test_show(self, runner, library_dir):
        invoke(runner, library_dir, "add", "Dune", "--tags", "sci-fi", "--note", "Spice")
        entry_id = stored_entries(library_dir)[0]["id"]

        result = invoke(runner, library_dir, "show", entry_id)
        assert result.exit_code == 0, result.output
        assert "Dune" in result.output
        assert "[sci-fi]" in result.output
        assert "Spice" in result.output

    def test_unknown_id(self, runner, library_dir):
        result = invoke(runner, library_dir, "show", "nope")
        assert result.exit_code == 1
        assert "Catalog entry not found: nope" in result.output

    def test_favorite_toggle(self, runner, library_dir):
        invoke(runner, library_dir, "add", "Dune")
        entry_id = stored_entries(library_dir)[0]["id"]

        result = invoke(runner, library_dir, "favorite", entry_id)
        assert "Marked favorite: Dune" in result.output
        assert stored_entries(library_dir)[0]["is_favorite"] is True

    def test_delete_confirmation(self, runner, library_dir):
        invoke(runner, library_dir, "add", "Dune")
        entry_id = stored_entries(library_dir)[0]["id"]

        cancelled = invoke(runner, library_dir, "delete", entry_id, input="n\n")
        assert "Cancelled" in cancelled.output
        assert len(stored_entries(library_dir)) == 1

        deleted = invoke(runner, library_dir, "delete", entry_id, "--yes")
        assert deleted.exit_code == 0
        assert stored_entries(library_dir) == []


class TestReportCommands:
    """Test report display and export."""

    def _seed(self, runner, library_dir):
        invoke(runner, library_dir, "add", "Dune", "--release-date", "2024-01-10", "--rating", "5")
        invoke(runner, library_dir, "add", "Arrival", "--kind", "movie",
               "--release-date", "2024-03-02", "--rating", "3", "--favorite")
        invoke(runner, library_dir, "add", "Old", "--release-date", "2020-05-05")

    def test_years(self, runner, library_dir):
        self._seed(runner, library_dir)
        result = invoke(runner, library_dir, "years")
        assert "Release years: 2024, 2020" in result.output
        assert "Report years:" in result.output

    def test_report_defaults_to_latest_year(self, runner, library_dir):
        self._seed(runner, library_dir)
        result = invoke(runner, library_dir, "report")
        assert result.exit_code == 0, result.output
        assert "2024" in result.output
        assert "Top Rated" in result.output
        assert "Dune" in result.output
        assert "Old" not in result.output

    def test_report_empty_year(self, runner, library_dir):
        result = invoke(runner, library_dir, "report", "--year", "1999")
        assert result.exit_code == 0
        assert "No entries for 1999" in result.output

    def test_export(self, runner, library_dir, tmp_path):
        self._seed(runner, library_dir)
        target = tmp_path / "report.json"

        result = invoke(runner, library_dir, "export", "--year", "2024", "-o", str(target))
        assert result.exit_code == 0, result.output
        assert "Report exported successfully to report.json." in result.output
        data = json.loads(target.read_text(encoding="utf-8"))
        assert data["total_count"] == 2
        assert data["favorite_count"] == 1

    def test_export_empty_year_fails(self, runner, library_dir, tmp_path):
        result = invoke(runner, library_dir, "export", "--year", "1999", "-o", str(tmp_path))
        assert result.exit_code == 1
        assert "No entries to export for 1999" in result.output


class TestConfigCommands:
    """Test configuration handling."""

    def test_init_config(self, runner, tmp_path):
        path = tmp_path / "config.json"
        result = runner.invoke(cli, ["init-config", str(path)])
        assert result.exit_code == 0
        assert path.exists()

        again = runner.invoke(cli, ["init-config", str(path)])
        assert again.exit_code == 1

    def test_config_limits_report(self, runner, library_dir, tmp_path):
        config_path = tmp_path / "config.json"
        config_path.write_text(json.dumps({"report": {"hours_per_entry": 10}}))
        invoke(runner, library_dir, "add", "Dune", "--release-date", "2024-01-10")
        target = tmp_path / "out.json"

        result = invoke(runner, library_dir, "--config", str(config_path), "export", "-o", str(target))
        assert result.exit_code == 0, result.output
        assert json.loads(target.read_text())["estimated_hours"] == 10

    def test_bad_config_fails(self, runner, library_dir, tmp_path):
        config_path = tmp_path / "config.json"
        config_path.write_text("{broken")
        result = runner.invoke(cli, ["--config", str(config_path), "--library", str(library_dir), "list"])
        assert result.exit_code == 1
        assert "Invalid configuration file" in result.output
