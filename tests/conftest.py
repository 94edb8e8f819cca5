"""Root conftest.py for test configuration.

Ensures local src/ directory takes priority over any installed packages, and
isolates every test from the CI variables, color settings and config files of
the machine running it.
"""

import os
import sys
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

# Insert local src directory at the beginning of sys.path
# This ensures that the local flowframe package is used, not any installed one
_src_dir = Path(__file__).parent.parent / "src"
if str(_src_dir) not in sys.path:
    sys.path.insert(0, str(_src_dir))

from flowframe.core.environment import CI_ENV_VARS  # noqa: E402

_COLOR_ENV_VARS = ("FORCE_COLOR", "NO_COLOR", "TTY_COMPATIBLE", "TTY_INTERACTIVE")


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch: pytest.MonkeyPatch, tmp_path_factory: pytest.TempPathFactory) -> None:
    """Clear CI/color variables and point the global config at an empty dir."""
    for var in (*CI_ENV_VARS, *_COLOR_ENV_VARS):
        monkeypatch.delenv(var, raising=False)
    for var in list(os.environ):
        if var.upper().startswith("FLOWFRAME__"):
            monkeypatch.delenv(var, raising=False)

    config_home = tmp_path_factory.mktemp("config-home")
    monkeypatch.setattr(
        "flowframe.config.loader.GLOBAL_CONFIG_PATH",
        config_home / "flowframe" / "config.yaml",
    )


@pytest.fixture
def make_location() -> Callable[..., dict[str, Any]]:
    """Build a raw Flow location dict."""

    def _make(
        source: str,
        start: tuple[int, int],
        end: tuple[int, int],
    ) -> dict[str, Any]:
        return {
            "source": source,
            "type": "SourceFile",
            "start": {"line": start[0], "column": start[1], "offset": 0},
            "end": {"line": end[0], "column": end[1], "offset": 0},
        }

    return _make


@pytest.fixture
def project(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """A project directory with two JavaScript sources, used as cwd."""
    root = tmp_path / "repo"
    (root / "src").mkdir(parents=True)
    (root / "src" / "a.js").write_text(
        "// @flow\n"
        "const a: number = 1;\n"
        "function foo(x: number): string {\n"
        "  return x;\n"
        "}\n"
        "export default foo(a);\n"
    )
    (root / "src" / "b.js").write_text(
        "// @flow\n"
        "export type Id = string;\n"
    )
    monkeypatch.chdir(root)
    return root
