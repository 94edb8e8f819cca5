"""Report models - type checker JSON input and derived records.

Input models validate a Flow ``--json --json-version 2`` report. Fields are
snake_case in Python and accept the camelCase keys Flow writes; everything
the reporter does not read is ignored.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Discriminator, Field, Tag
from pydantic.alias_generators import to_camel

from flowframe.report.style import Segment

ReferenceKind = Literal["primary", "root"]

PRIMARY_ID = "[1]"
ROOT_ID = "[2]"


class _ReportModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        frozen=True,
    )


class Position(_ReportModel):
    """1-based line/column pair."""

    line: int = Field(ge=1)
    column: int = Field(ge=1)


class RawLocation(_ReportModel):
    """A source span as recorded by the type checker."""

    source: str
    start: Position
    end: Position


class TextToken(_ReportModel):
    kind: Literal["Text"] = "Text"
    text: str


class CodeToken(_ReportModel):
    kind: Literal["Code"] = "Code"
    text: str


class ReferenceToken(_ReportModel):
    kind: Literal["Reference"] = "Reference"
    reference_id: str
    message: list[MarkupToken] = Field(default_factory=list)


class UnknownToken(_ReportModel):
    """Any markup kind the reporter does not render."""

    kind: str


def _token_tag(value: Any) -> str:
    kind = value.get("kind") if isinstance(value, dict) else getattr(value, "kind", None)
    if kind in ("Text", "Code", "Reference"):
        return kind
    return "Unknown"


MarkupToken = Annotated[
    Annotated[TextToken, Tag("Text")]
    | Annotated[CodeToken, Tag("Code")]
    | Annotated[ReferenceToken, Tag("Reference")]
    | Annotated[UnknownToken, Tag("Unknown")],
    Discriminator(_token_tag),
]

ReferenceToken.model_rebuild()


class RawError(_ReportModel):
    """One diagnostic entry of the report."""

    primary_loc: RawLocation
    reference_locs: dict[str, RawLocation] = Field(default_factory=dict)
    message_markup: list[MarkupToken] = Field(default_factory=list)


class ReportStatus(_ReportModel):
    """Only the verdict of a report; the error list is not looked at."""

    passed: bool


class DiagnosticReport(_ReportModel):
    """Top-level type checker report."""

    passed: bool
    errors: list[RawError] | None = None


@dataclass
class SourceLocation:
    """Range handed to the frame renderer; end column is inclusive-adjusted."""

    start: Position
    end: Position


@dataclass
class ResolvedReference:
    """A location resolved against the working directory."""

    kind: ReferenceKind
    absolute_path: str
    relative_path: str
    loc: SourceLocation
    id: str
    shown_path: str
    content: str | None = None  # filled by the source loader
    frame: str | None = None  # filled by the frame renderer


@dataclass
class NormalizedError:
    """A diagnostic reduced to its styled message and references."""

    message: list[Segment]
    primary: RawLocation | ResolvedReference
    root: RawLocation | ResolvedReference | None = None
