"""Runtime environment checks: CI detection and terminal color support."""

from __future__ import annotations

import os
import sys

from rich.console import Console

# Any of these set to a non-empty value marks a continuous-integration run.
CI_ENV_VARS: tuple[str, ...] = (
    "CI",
    "CONTINUOUS_INTEGRATION",
    "BUILD_NUMBER",
    "RUN_ID",
    "GITHUB_ACTIONS",
    "GITLAB_CI",
    "JENKINS_URL",
    "TRAVIS",
    "CIRCLECI",
    "BUILDKITE",
    "TF_BUILD",
    "CODEBUILD_BUILD_ID",
    "BITBUCKET_COMMIT",
    "TEAMCITY_VERSION",
    "DRONE",
    "SEMAPHORE",
    "APPVEYOR",
    "BUDDY",
    "CI_NAME",
)

_FALSE_VALUES = frozenset({"false", "0"})

_COLOR_LEVELS = {
    "standard": 1,
    "windows": 1,
    "256": 2,
    "truecolor": 3,
}


def is_ci_environment() -> bool:
    """Return True when running under a continuous-integration service.

    An explicit ``CI=false`` (or ``CI=0``) wins over every other variable so
    a CI job can opt out of CI-specific behavior. Empty values do not count.
    """
    explicit = os.environ.get("CI")
    if explicit is not None and explicit.strip().lower() in _FALSE_VALUES:
        return False
    return any(os.environ.get(var) for var in CI_ENV_VARS)


def stdout_color_level() -> int:
    """Color support of stdout: 0 none, 1 basic, 2 256 colors, 3 truecolor."""
    console = Console(file=sys.stdout)
    if not console.is_terminal:
        return 0
    color_system = console.color_system
    if color_system is None:
        return 0
    return _COLOR_LEVELS.get(color_system, 1)
