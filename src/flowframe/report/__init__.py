"""Report module - parse type checker JSON and render code frames."""

from flowframe.report.formatter import format_report, load_report
from flowframe.report.models import DiagnosticReport, NormalizedError, RawError, ResolvedReference
from flowframe.report.options import ReportOptions, get_default_options

__all__ = [
    "DiagnosticReport",
    "NormalizedError",
    "RawError",
    "ReportOptions",
    "ResolvedReference",
    "format_report",
    "get_default_options",
    "load_report",
]
