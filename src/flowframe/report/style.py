"""Styling context threaded through every rendering step.

Styled pieces of the report are kept as ``(text, style)`` segments and only
turned into strings here. Text is never routed through a Rich ``Text`` or a
console, so tabs and control characters survive byte for byte, and enabling
color for one report never leaks into another.
"""

from __future__ import annotations

from collections.abc import Iterable

from rich.color import ColorSystem
from rich.style import Style

PRIMARY_STYLE = "bold blue"
ROOT_STYLE = "bold red"

StyleType = str | Style | None
# A run of literal text and the style it is shown in.
Segment = tuple[str, StyleType]


class StyleContext:
    """Renders segments with or without ANSI styling."""

    def __init__(self, *, color: bool) -> None:
        self.color = bool(color)

    def style(self, value: str, style: StyleType) -> str:
        """Wrap ``value`` in the escape codes for ``style`` when color is on."""
        if not self.color or not style or not value:
            return value
        if isinstance(style, str):
            style = Style.parse(style)
        return style.render(value, color_system=ColorSystem.STANDARD)

    def render(self, segments: Iterable[Segment] | str) -> str:
        """Render to a string; no ANSI escapes at all when color is off."""
        if isinstance(segments, str):
            return segments
        return "".join(self.style(text, style) for text, style in segments)
