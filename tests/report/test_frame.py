"""Tests for report/frame.py module.

Covers:
- marker_lines() window and caret ranges
- code_frame() layout, gutter width, tabs, multi-line spans
- code_frame() styling with and without highlighting
- render_frames() attaching frames to references
"""

from __future__ import annotations

from pathlib import Path


from flowframe.report.frame import code_frame, frame_marker_style, marker_lines, render_frames
from flowframe.report.markup import normalize_error
from flowframe.report.models import Position, RawError, ResolvedReference, SourceLocation
from flowframe.report.options import ReportOptions
from flowframe.report.references import resolve_references
from flowframe.report.sources import load_contents
from flowframe.report.style import Segment, StyleContext

SOURCE = (
    "// @flow\n"
    "const a: number = 1;\n"
    "function foo(x: number): string {\n"
    "  return x;\n"
    "}\n"
    "export default foo(a);\n"
)


def _loc(start: tuple[int, int], end: tuple[int, int]) -> SourceLocation:
    return SourceLocation(
        start=Position(line=start[0], column=start[1]),
        end=Position(line=end[0], column=end[1]),
    )


def _plain(frame: list[Segment]) -> str:
    return StyleContext(color=False).render(frame)


class TestMarkerLines:
    """Tests for marker_lines."""

    def test_given_single_line_span_when_computed_then_column_and_width(self) -> None:
        """A one-line span marks end - start columns."""
        lines = SOURCE.split("\n")
        start, end, markers = marker_lines(_loc((4, 10), (4, 11)), lines)
        assert (start, end) == (1, 7)
        assert markers == {4: (10, 1)}

    def test_given_zero_width_span_when_computed_then_single_caret(self) -> None:
        """Equal start and end columns still mark one caret."""
        _, _, markers = marker_lines(_loc((2, 7), (2, 7)), SOURCE.split("\n"))
        assert markers == {2: (7, 0)}

    def test_given_multi_line_span_when_computed_then_every_line_marked(self) -> None:
        """First line runs to its end, middle lines fully, last line to end column."""
        lines = ["abcdef", "middle line", "xyz"]
        _, _, markers = marker_lines(_loc((1, 3), (3, 3)), lines)
        assert markers == {1: (3, 4), 2: (0, 11), 3: (0, 3)}

    def test_given_custom_context_when_computed_then_window_follows(self) -> None:
        """lines_above/lines_below bound the window."""
        lines = [f"line {n}" for n in range(1, 21)]
        start, end, _ = marker_lines(_loc((10, 1), (10, 2)), lines, lines_above=0, lines_below=1)
        assert (start, end) == (9, 11)

    def test_given_span_at_file_start_when_computed_then_window_clamped(self) -> None:
        """The window never starts before the first line."""
        start, _, _ = marker_lines(_loc((1, 1), (1, 2)), SOURCE.split("\n"))
        assert start == 0


class TestCodeFrame:
    """Tests for code_frame."""

    def test_given_single_line_span_when_rendered_then_babel_layout(self) -> None:
        """Context lines, '>' marker and caret row follow the codeframe layout."""
        # Given
        loc = _loc((4, 10), (4, 11))

        # When
        frame = _plain(code_frame(SOURCE, loc, message="[1]"))

        # Then
        assert frame == "\n".join(
            [
                "  2 | const a: number = 1;",
                "  3 | function foo(x: number): string {",
                "> 4 |   return x;",
                "    |          ^ [1]",
                "  5 | }",
                "  6 | export default foo(a);",
                "  7 |",
            ]
        )

    def test_given_multi_line_span_when_rendered_then_message_on_last_marker(self) -> None:
        """Every marked line gets carets; only the last carries the message."""
        # Given
        loc = _loc((3, 14), (4, 11))

        # When
        frame = _plain(code_frame(SOURCE, loc, message="[2]"))

        # Then
        caret_rows = [row for row in frame.split("\n") if row.startswith("    |")]
        assert caret_rows == [
            "    |              " + "^" * 20,
            "    | " + "^" * 11 + " [2]",
        ]
        assert "> 3 | function foo(x: number): string {" in frame
        assert "> 4 |   return x;" in frame

    def test_given_two_digit_line_numbers_when_rendered_then_gutter_padded(self) -> None:
        """Line numbers are right-aligned to the widest shown number."""
        # Given
        source = "\n".join(f"x{n}" for n in range(1, 13))

        # When
        frame = _plain(code_frame(source, _loc((9, 1), (9, 3)), message="[1]"))

        # Then
        rows = frame.split("\n")
        assert rows[0] == "   7 | x7"
        assert ">  9 | x9" in rows
        assert rows[-1] == "  12 | x12"
        assert "     | ^^ [1]" in rows

    def test_given_tab_indent_when_rendered_then_tabs_kept_in_caret_row(self) -> None:
        """Tabs before the span are kept so carets line up."""
        # Given
        source = "\tfoo(bar);\n"

        # When
        frame = _plain(code_frame(source, _loc((1, 6), (1, 9)), message="[1]"))

        # Then
        assert frame == "> 1 | \tfoo(bar);\n    | \t    ^^^ [1]\n  2 |"

    def test_given_control_characters_when_rendered_then_kept(self) -> None:
        """Form feeds and other control characters pass through untouched."""
        # Given
        source = "a\x0cb = 1;\x0b\n"

        # When
        frame = _plain(code_frame(source, _loc((1, 1), (1, 2)), message="[1]"))

        # Then
        assert frame == "> 1 | a\x0cb = 1;\x0b\n    | ^ [1]\n  2 |"

    def test_given_crlf_source_when_rendered_then_lines_split(self) -> None:
        """Windows line endings are treated as line breaks."""
        # Given
        source = "one\r\ntwo\r\nthree"

        # When
        frame = _plain(code_frame(source, _loc((2, 1), (2, 4)), message="[1]"))

        # Then
        assert frame.split("\n")[:3] == ["  1 | one", "> 2 | two", "    | ^^^ [1]"]

    def test_given_no_message_when_rendered_then_only_carets(self) -> None:
        """Without a message the caret row ends at the carets."""
        frame = _plain(code_frame("abc\n", _loc((1, 2), (1, 3))))
        assert "    |  ^" in frame.split("\n")

    def test_given_color_when_rendered_then_carets_take_marker_style(self) -> None:
        """Carets and message are styled with the marker style."""
        # Given
        frame = code_frame(SOURCE, _loc((4, 10), (4, 11)), message="[2]", marker_style="bold red")

        # When
        rendered = StyleContext(color=True).render(frame)

        # Then
        assert "\x1b[1;31m^ [2]\x1b[0m" in rendered
        assert "> 4 |   return x;" in rendered

    def test_given_highlight_when_rendered_then_plain_text_unchanged(self) -> None:
        """Highlighting adds styles but not characters."""
        # Given
        loc = _loc((4, 10), (4, 11))

        # When
        highlighted = code_frame(SOURCE, loc, message="[1]", highlight=True, path="a.js")
        plain = code_frame(SOURCE, loc, message="[1]")

        # Then
        assert _plain(highlighted) == _plain(plain)
        assert StyleContext(color=True).render(highlighted) != StyleContext(color=True).render(plain)

    def test_given_unknown_file_type_when_highlighted_then_still_renders(self) -> None:
        """Files without a lexer render without syntax colors."""
        frame = code_frame("data\n", _loc((1, 1), (1, 2)), highlight=True, path="notes.unknownext")
        assert _plain(frame).startswith("> 1 | data")


class TestFrameMarkerStyle:
    """Tests for frame_marker_style."""

    def test_primary_is_blue(self) -> None:
        assert frame_marker_style("[1]") == "bold blue"

    def test_root_is_red(self) -> None:
        assert frame_marker_style("[2]") == "bold red"


class TestRenderFrames:
    """Tests for render_frames."""

    def test_given_loaded_references_when_rendered_then_frames_attached(self, project: Path) -> None:
        """Primary and root frames are rendered with their ids."""
        # Given
        raw = RawError.model_validate(
            {
                "primaryLoc": {
                    "source": str(project / "src" / "a.js"),
                    "start": {"line": 4, "column": 10},
                    "end": {"line": 4, "column": 10},
                },
                "referenceLocs": {
                    "2": {
                        "source": str(project / "src" / "b.js"),
                        "start": {"line": 2, "column": 18},
                        "end": {"line": 2, "column": 23},
                    }
                },
                "messageMarkup": [],
            }
        )
        error = load_contents(resolve_references(normalize_error(raw), cwd=project), cwd=project)

        # When
        render_frames(error, style=StyleContext(color=False), options=ReportOptions())

        # Then
        assert isinstance(error.primary, ResolvedReference)
        assert isinstance(error.root, ResolvedReference)
        assert error.primary.frame is not None
        assert "    |          ^ [1]" in error.primary.frame
        assert error.root.frame == "\n".join(
            [
                "  1 | // @flow",
                "> 2 | export type Id = string;",
                "    |                  ^^^^^^ [2]",
                "  3 |",
            ]
        )
