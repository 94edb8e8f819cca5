"""Format a type checker JSON report as an ESLint-codeframe style text report.

Usage::

    from flowframe import format_report

    output = format_report(flow_stdout, {"color": False})
    if output is not None:
        print(output)

Each error goes through the same steps, in input order: normalize the
message markup, resolve the locations, load the sources, render the frames,
then assemble the block. Any failure aborts the whole report.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from pathlib import Path
from typing import Any, TypeVar, cast

from pydantic import BaseModel, ValidationError

from flowframe.core.errors import MalformedReportError, ParseError
from flowframe.core.logging import get_logger
from flowframe.report.frame import render_frames
from flowframe.report.markup import normalize_error
from flowframe.report.models import DiagnosticReport, NormalizedError, ReportStatus, ResolvedReference
from flowframe.report.options import ReportOptions, resolve_options
from flowframe.report.references import resolve_references
from flowframe.report.sources import load_contents
from flowframe.report.style import Segment, StyleContext

log = get_logger("report.formatter")

ERROR_HEADLINE = "some type failures found"

_ModelT = TypeVar("_ModelT", bound=BaseModel)


def _validate(model: type[_ModelT], data: Mapping[str, Any]) -> _ModelT:
    try:
        return model.model_validate(data)
    except ValidationError as e:
        err = e.errors()[0]
        field = ".".join(str(loc) for loc in err["loc"]) or "<root>"
        raise MalformedReportError.invalid_shape(field, err["msg"]) from e


def load_report(val: str | bytes | Mapping[str, Any] | DiagnosticReport) -> DiagnosticReport:
    """Decode and validate a report given as JSON text or a decoded mapping.

    Raises:
        ParseError: If ``val`` is text but not valid JSON.
        MalformedReportError: If ``val`` is empty or does not have the
            report's shape.
    """
    if isinstance(val, DiagnosticReport):
        return val

    if isinstance(val, (str, bytes)):
        if not val.strip():
            raise MalformedReportError.empty_input(type(val).__name__)
        try:
            data = json.loads(val)
        except json.JSONDecodeError as e:
            raise ParseError.invalid_json(e.msg, e.lineno, e.colno) from e
    else:
        data = val

    if not data:
        raise MalformedReportError.empty_input(type(data).__name__)
    if not isinstance(data, Mapping):
        raise MalformedReportError.invalid_shape("<root>", f"expected an object, got {type(data).__name__}")

    # A passing report yields nothing, whatever its error list holds.
    if _validate(ReportStatus, data).passed:
        return DiagnosticReport(passed=True)

    report = _validate(DiagnosticReport, data)
    if report.errors is None:
        raise MalformedReportError.missing_errors()
    return report


def format_error_block(error: NormalizedError, style: StyleContext) -> list[str]:
    """Lines for one error: headline, message, then each reference's frame."""
    primary = cast(ResolvedReference, error.primary)
    headline: list[Segment] = [
        ("error", "red"),
        (": ", None),
        (ERROR_HEADLINE, "bold"),
        (" ", None),
        ("(null)", "dim"),
        (" at ", None),
        (primary.shown_path, "green"),
        (":", None),
    ]

    lines = [
        style.render(headline),
        style.render(error.message),
        "",
        style.style(primary.shown_path, "blue"),
        primary.frame or "",
    ]
    if error.root is not None:
        root = cast(ResolvedReference, error.root)
        lines.extend(["", style.style(root.shown_path, "red"), root.frame or ""])
    lines.append("")
    return lines


def format_summary(count: int, style: StyleContext) -> str:
    # Plural for every count; tools scraping the output match this line.
    return style.style(f"{count} errors found.", "bold red")


def format_report(
    val: str | bytes | Mapping[str, Any] | DiagnosticReport,
    options: ReportOptions | Mapping[str, Any] | None = None,
) -> str | None:
    """Render a type checker report.

    Args:
        val: JSON text or an already decoded report.
        options: ``ReportOptions`` or a mapping of option names
            (``color``, ``highlight_code``/``highlightCode``, ...). Unset
            options fall back to ``get_default_options()``.

    Returns:
        The report text, or None when the report passed.

    Raises:
        ParseError: Invalid JSON.
        MalformedReportError: Input without the expected shape.
        FileReadError: A referenced source file cannot be read.
        ConfigError: Unknown or invalid options.
    """
    opts = resolve_options(options)
    report = load_report(val)
    if report.passed:
        log.debug("report_passed")
        return None

    errors = report.errors or []
    log.debug("report_loaded", errors=len(errors), color=bool(opts.color), ci=opts.ci)

    style = StyleContext(color=bool(opts.color))
    cwd = opts.cwd or Path.cwd()

    output = [""]
    for raw in errors:
        error = normalize_error(raw)
        error = resolve_references(error, cwd=cwd, ci=opts.ci)
        error = load_contents(error, cwd=cwd, ci=opts.ci)
        error = render_frames(error, style=style, options=opts)
        output.extend(format_error_block(error, style))
    output.append(format_summary(len(errors), style))

    log.debug("report_formatted", errors=len(errors))
    return "\n".join(output)
