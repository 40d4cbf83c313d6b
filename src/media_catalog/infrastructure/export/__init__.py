"""Report exporters."""

from .report_exporter import EXPORT_FORMATS, ReportExporter, default_report_filename

__all__ = ["EXPORT_FORMATS", "ReportExporter", "default_report_filename"]
