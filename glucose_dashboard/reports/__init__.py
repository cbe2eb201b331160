"""Report generation and export."""

from glucose_dashboard.reports.generator import ReportGenerator
from glucose_dashboard.reports.export import (
    export_readings_csv,
    export_pattern_report_excel,
    readings_to_export_frame,
    default_export_filename,
)

__all__ = [
    "ReportGenerator",
    "export_readings_csv",
    "export_pattern_report_excel",
    "readings_to_export_frame",
    "default_export_filename",
]
