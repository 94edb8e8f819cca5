"""Load the source files that report locations point into."""

from __future__ import annotations

from pathlib import Path

from flowframe.core.errors import FileReadError
from flowframe.core.logging import get_logger
from flowframe.report.models import NormalizedError, ResolvedReference

log = get_logger("report.sources")


def source_path(ref: ResolvedReference, *, cwd: Path, ci: bool = False) -> Path:
    """Path to read for a reference.

    In CI the relative path is re-anchored on the working directory, since the
    recorded absolute path may come from a different checkout root.
    """
    if ci:
        return (cwd / ref.relative_path).resolve()
    return Path(ref.absolute_path)


def load_source(path: Path) -> str:
    """Read a whole file as UTF-8 text.

    Raises:
        FileReadError: If the file is missing, unreadable or not UTF-8.
    """
    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise FileReadError.unreadable(str(path), str(e)) from e
    log.debug("source_loaded", path=str(path), size=len(content))
    return content


def load_contents(error: NormalizedError, *, cwd: Path, ci: bool = False) -> NormalizedError:
    """Attach file contents to the primary and root references."""
    for ref in (error.primary, error.root):
        if isinstance(ref, ResolvedReference):
            ref.content = load_source(source_path(ref, cwd=cwd, ci=ci))
    return error
