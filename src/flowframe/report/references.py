"""Resolve raw report locations against the working directory."""

from __future__ import annotations

import os
from pathlib import Path

from flowframe.core.logging import get_logger
from flowframe.report.models import (
    PRIMARY_ID,
    ROOT_ID,
    NormalizedError,
    Position,
    RawLocation,
    ReferenceKind,
    ResolvedReference,
    SourceLocation,
)

log = get_logger("report.references")


def rebase_path(recorded: str, cwd: Path) -> str:
    """Move a path recorded on another machine under ``cwd``.

    Finds the first occurrence of ``cwd``'s folder name in ``recorded`` and
    joins whatever follows it onto ``cwd``. This assumes the checkout folder
    has the same name in both places and that the name occurs only once in
    the recorded path. When the name is absent the path is returned unchanged.
    """
    basename = cwd.name
    index = recorded.find(basename) if basename else -1
    if index < 0:
        log.debug("ci_path_not_rebased", path=recorded, marker=basename)
        return recorded

    tail = recorded[index + len(basename) + 1 :]
    rebased = os.path.normpath(os.path.join(cwd, tail))
    log.debug("ci_path_rebased", path=recorded, rebased=rebased)
    return rebased


def resolve_reference(
    location: RawLocation,
    kind: ReferenceKind,
    *,
    cwd: Path,
    ci: bool = False,
) -> ResolvedReference:
    """Build a ResolvedReference for one location.

    The end column is bumped by one so the frame marks the last character of
    the span; the shown path keeps the original start line and column.
    """
    start = location.start
    end = location.end
    loc = SourceLocation(
        start=Position(line=start.line, column=start.column),
        end=Position(line=end.line, column=end.column + 1),
    )

    absolute_path = location.source
    if ci:
        absolute_path = rebase_path(absolute_path, cwd)

    relative_path = os.path.relpath(absolute_path, cwd)
    ref = ResolvedReference(
        kind=kind,
        absolute_path=absolute_path,
        relative_path=relative_path,
        loc=loc,
        id=PRIMARY_ID if kind == "primary" else ROOT_ID,
        shown_path=f"{relative_path}:{start.line}:{start.column}",
    )
    log.debug("reference_resolved", kind=kind, path=ref.shown_path)
    return ref


def resolve_references(error: NormalizedError, *, cwd: Path, ci: bool = False) -> NormalizedError:
    """Resolve the primary location and, when present, the root location."""
    if isinstance(error.primary, RawLocation):
        error.primary = resolve_reference(error.primary, "primary", cwd=cwd, ci=ci)
    if isinstance(error.root, RawLocation):
        error.root = resolve_reference(error.root, "root", cwd=cwd, ci=ci)
    return error
