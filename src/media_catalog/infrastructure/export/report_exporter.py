"""Yearly report export.

Serializes a computed YearlyReport to JSON, CSV or plain text. The exporter
only reads the report; it never touches catalog state.
"""

import csv
import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional

from ...domain.reporting import YearlyReport
from ...exceptions import ExportError

logger = logging.getLogger(__name__)

EXPORT_FORMATS = ("json", "csv", "txt")


def default_report_filename(year: int, export_format: str = "json") -> str:
    """File name offered for a report export."""
    return f"Yearly_Report_{year}.{export_format}"


class ReportExporter:
    """Writes yearly reports to disk."""

    def __init__(self, export_format: str = "json"):
        self.export_format = self._check_format(export_format)

    @staticmethod
    def _check_format(export_format: str) -> str:
        fmt = export_format.lower()
        if fmt not in EXPORT_FORMATS:
            raise ExportError(
                f"Unsupported export format: {export_format} (expected one of {', '.join(EXPORT_FORMATS)})"
            )
        return fmt

    def build_export_data(self, report: YearlyReport) -> Dict[str, Any]:
        """Assemble the exported document."""
        return {
            "generated_at": datetime.now().isoformat(),
            "title": f"{report.year} Year in Review - Digital Library",
            **report.to_dict(),
        }

    def export(
        self,
        report: YearlyReport,
        output_path: Path,
        export_format: Optional[str] = None,
    ) -> Path:
        """Export ``report`` to ``output_path``.

        If ``output_path`` is an existing directory the default file name is
        used inside it.

        Raises:
            ExportError: If the report is empty, the format is unknown or
                the file cannot be written.
        """
        fmt = self._check_format(export_format or self.export_format)

        if report.is_empty:
            raise ExportError(f"No entries to export for {report.year}")

        output_path = Path(output_path)
        if output_path.is_dir():
            output_path = output_path / default_report_filename(report.year, fmt)

        export_data = self.build_export_data(report)
        try:
            if fmt == "json":
                self._write_json(export_data, output_path)
            elif fmt == "csv":
                self._write_csv(export_data, output_path)
            else:
                self._write_text(export_data, output_path)
        except OSError as e:
            raise ExportError(f"Failed to save report: {e}") from e

        logger.info("Exported %s report for %s to %s", fmt, report.year, output_path)
        return output_path

    def _write_json(self, export_data: Dict[str, Any], output_path: Path) -> None:
        with open(output_path, 'w', encoding='utf-8') as f:
            json.dump(export_data, f, indent=2, ensure_ascii=False)

    def _write_csv(self, export_data: Dict[str, Any], output_path: Path) -> None:
        with open(output_path, 'w', newline='', encoding='utf-8') as f:
            writer = csv.writer(f)
            writer.writerow(["section", "key", "value"])
            writer.writerow(["summary", "year", export_data["year"]])
            writer.writerow(["summary", "total_count", export_data["total_count"]])
            writer.writerow(["summary", "favorite_count", export_data["favorite_count"]])
            writer.writerow(["summary", "estimated_hours", export_data["estimated_hours"]])
            for row in export_data["kind_breakdown"]:
                writer.writerow(["kind_breakdown", row["kind"], row["count"]])
            for rank, item in enumerate(export_data["top_rated"], start=1):
                writer.writerow([
                    "top_rated",
                    rank,
                    f"{item['title']} / {item['creator']} / {item['rating']}",
                ])

    def _write_text(self, export_data: Dict[str, Any], output_path: Path) -> None:
        with open(output_path, 'w', encoding='utf-8') as f:
            f.write(f"{export_data['title'].upper()}\n")
            f.write("=" * 50 + "\n\n")
            f.write(f"Generated: {export_data['generated_at']}\n\n")

            f.write(f"Total Items: {export_data['total_count']}\n")
            f.write(f"Favorite Items: {export_data['favorite_count']}\n")
            f.write(f"Estimated Hours: {export_data['estimated_hours']}h\n\n")

            if export_data["kind_breakdown"]:
                f.write("Breakdown\n")
                f.write("-" * 9 + "\n")
                for row in export_data["kind_breakdown"]:
                    f.write(f"  {row['display_name']}: {row['count']}\n")
                f.write("\n")

            if export_data["top_rated"]:
                f.write("Top Rated\n")
                f.write("-" * 9 + "\n")
                for rank, item in enumerate(export_data["top_rated"], start=1):
                    stars = "*" * item["rating"]
                    f.write(f"  {rank}. {item['title']} - {item['creator']} {stars}\n")
