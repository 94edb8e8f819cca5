"""Message markup rendering.

Turns the type checker's message tokens into a single styled line. Bracketed
reference ids are styled as their own segment, so ``[1]`` and ``[2]`` get the
same colors as the frames they point at, wherever they appear.
"""

from __future__ import annotations

from collections.abc import Sequence

from flowframe.report.models import (
    CodeToken,
    MarkupToken,
    NormalizedError,
    RawError,
    ReferenceToken,
    TextToken,
)
from flowframe.report.style import PRIMARY_STYLE, ROOT_STYLE, Segment

_REFERENCE_ID_STYLES = {
    "1": PRIMARY_STYLE,
    "2": ROOT_STYLE,
}


def _reference_label(token: ReferenceToken) -> str:
    if not token.message:
        return ""
    first = token.message[0]
    return getattr(first, "text", "")


def build_message(tokens: Sequence[MarkupToken]) -> list[Segment]:
    """Assemble markup tokens left to right.

    Text is literal, Code is bold, and a Reference becomes its underlined
    label followed by `` [id]``. Unknown kinds contribute nothing.
    """
    message: list[Segment] = []
    for token in tokens:
        if isinstance(token, TextToken):
            message.append((token.text, None))
        elif isinstance(token, CodeToken):
            message.append((token.text, "bold"))
        elif isinstance(token, ReferenceToken):
            message.append((_reference_label(token), "underline"))
            message.append((" ", None))
            message.append((f"[{token.reference_id}]", _REFERENCE_ID_STYLES.get(token.reference_id)))
    return message


def normalize_error(raw: RawError) -> NormalizedError:
    """Reduce a raw error to its message, primary location and root location."""
    return NormalizedError(
        message=build_message(raw.message_markup),
        primary=raw.primary_loc,
        root=raw.reference_locs.get("2"),
    )
