"""flowframe - ESLint codeframe style reporter for Flow type check results."""

from flowframe.report import ReportOptions, format_report, get_default_options

__version__ = "0.1.0"

__all__ = [
    "ReportOptions",
    "format_report",
    "get_default_options",
]
