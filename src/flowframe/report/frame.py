"""Annotated source excerpts ("code frames").

Layout follows the Babel/ESLint codeframe style::

      1 | const a = 1;
    > 2 | let bad = foo(a);
        |     ^^^ [1]
      3 | export default bad;

The window spans ``lines_above`` lines before the first marked line and
``lines_below`` lines after the last one. Carets and the trailing message are
styled with the caller's marker style, so a primary frame and a root frame
can be told apart by color alone.

Frames are built as ``(text, style)`` segments over the untouched source
lines; tabs and control characters are carried through as is.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Any

from pygments.lexers import get_lexer_for_filename
from pygments.styles import get_style_by_name
from pygments.util import ClassNotFound
from rich.style import Style

from flowframe.core.errors import ConfigError
from flowframe.report.models import PRIMARY_ID, NormalizedError, ResolvedReference, SourceLocation
from flowframe.report.style import PRIMARY_STYLE, ROOT_STYLE, Segment, StyleContext

if TYPE_CHECKING:
    from pygments.style import StyleMeta

    from flowframe.report.options import ReportOptions

NEWLINE = re.compile(r"\r\n|[\n\r\u2028\u2029]")
_NOT_TAB = re.compile(r"[^\t]")
_DIGIT = re.compile(r"\d")

GUTTER_STYLE = "bright_black"
LINE_MARKER_STYLE = "bold red"

# (first marked column, caret count)
MarkerRange = tuple[int, int]


def frame_marker_style(ref_id: str) -> str:
    return PRIMARY_STYLE if ref_id == PRIMARY_ID else ROOT_STYLE


def _line_length(lines: list[str], number: int) -> int:
    if 1 <= number <= len(lines):
        return len(lines[number - 1])
    return 0


def marker_lines(
    loc: SourceLocation,
    lines: list[str],
    *,
    lines_above: int = 2,
    lines_below: int = 3,
) -> tuple[int, int, dict[int, MarkerRange]]:
    """Compute the visible window and the caret range of every marked line.

    Returns ``(start, end, markers)`` where ``start``/``end`` bound the
    0-based slice of ``lines`` to show and ``markers`` maps 1-based line
    numbers to ``(column, count)``.
    """
    start_line, start_column = loc.start.line, loc.start.column
    end_line, end_column = loc.end.line, loc.end.column

    start = max(start_line - (lines_above + 1), 0)
    end = min(len(lines), end_line + lines_below)

    markers: dict[int, MarkerRange] = {}
    line_diff = end_line - start_line
    if line_diff > 0:
        for i in range(line_diff + 1):
            number = start_line + i
            if i == 0:
                markers[number] = (start_column, _line_length(lines, number) - start_column + 1)
            elif i == line_diff:
                markers[number] = (0, end_column)
            else:
                markers[number] = (0, _line_length(lines, number))
    elif start_column == end_column:
        markers[start_line] = (start_column, 0)
    else:
        markers[start_line] = (start_column, end_column - start_column)

    return start, end, markers


def _token_style(style_class: StyleMeta, token_type: Any) -> Style | None:
    """Foreground and font attributes of a token; theme backgrounds are dropped."""
    spec = style_class.style_for_token(token_type)
    if not (spec["color"] or spec["bold"] or spec["italic"] or spec["underline"]):
        return None
    return Style(
        color=f"#{spec['color']}" if spec["color"] else None,
        bold=spec["bold"] or None,
        italic=spec["italic"] or None,
        underline=spec["underline"] or None,
    )


def highlight_lines(source: str, path: str | None, theme: str = "monokai") -> list[list[Segment]]:
    """Syntax-highlight ``source`` with the Pygments lexer for ``path``.

    Returns one segment list per line. Unknown file types come back unstyled.

    Raises:
        ConfigError: If ``theme`` is not a Pygments style.
    """
    try:
        lexer = get_lexer_for_filename(path or "", stripnl=False, ensurenl=False)
    except ClassNotFound:
        return [[(line, None)] for line in source.split("\n")]
    try:
        style_class = get_style_by_name(theme)
    except ClassNotFound as e:
        raise ConfigError.invalid_value("theme", theme, "unknown Pygments style") from e

    styles: dict[Any, Style | None] = {}
    lines: list[list[Segment]] = [[]]
    for token_type, value in lexer.get_tokens(source):
        if token_type not in styles:
            styles[token_type] = _token_style(style_class, token_type)
        style = styles[token_type]
        first, *rest = value.split("\n")
        if first:
            lines[-1].append((first, style))
        for part in rest:
            lines.append([(part, style)] if part else [])
    return lines


def code_frame(
    source: str,
    loc: SourceLocation,
    *,
    message: str | None = None,
    marker_style: str = PRIMARY_STYLE,
    highlight: bool = False,
    path: str | None = None,
    theme: str = "monokai",
    lines_above: int = 2,
    lines_below: int = 3,
) -> list[Segment]:
    """Render the lines around ``loc`` with a caret row under the marked span."""
    source = NEWLINE.sub("\n", source)
    lines = source.split("\n")
    start, end, markers = marker_lines(loc, lines, lines_above=lines_above, lines_below=lines_below)
    number_width = len(str(end))

    rendered_lines: list[list[Segment]] = [[(line, None)] for line in lines]
    if highlight:
        highlighted = highlight_lines(source, path, theme)
        # The lexer must hand back the source unchanged, line for line.
        if ["".join(text for text, _ in row) for row in highlighted] == lines:
            rendered_lines = highlighted

    gutter_style = GUTTER_STYLE if highlight else None
    frame: list[Segment] = []
    for index in range(start, end):
        if index > start:
            frame.append(("\n", None))
        number = index + 1
        line = lines[index]
        gutter = f" {(' ' + str(number))[-number_width:]} |"
        marker = markers.get(number)

        if marker is None:
            frame.append((" ", None))
        else:
            frame.append((">", LINE_MARKER_STYLE if highlight else None))
        frame.append((gutter, gutter_style))
        if line:
            frame.append((" ", None))
            frame.extend(rendered_lines[index])
        if marker is None:
            continue

        column, count = marker
        spacing = _NOT_TAB.sub(" ", line[: max(column - 1, 0)])
        frame.append(("\n ", None))
        frame.append((_DIGIT.sub(" ", gutter), gutter_style))
        frame.append((" " + spacing, None))
        carets = "^" * (count or 1)
        if message and (number + 1) not in markers:
            carets += " " + message
        frame.append((carets, marker_style))

    return frame


def render_frames(error: NormalizedError, *, style: StyleContext, options: ReportOptions) -> NormalizedError:
    """Render and attach a frame for the primary and root references."""
    highlight = style.color and options.highlight_code
    for ref in (error.primary, error.root):
        if not isinstance(ref, ResolvedReference) or ref.content is None:
            continue
        frame = code_frame(
            ref.content,
            ref.loc,
            message=ref.id,
            marker_style=frame_marker_style(ref.id),
            highlight=highlight,
            path=ref.absolute_path,
            theme=options.theme,
            lines_above=options.lines_above,
            lines_below=options.lines_below,
        )
        ref.frame = style.render(frame)
    return error
