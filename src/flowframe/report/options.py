"""Report options and their environment-derived defaults."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic.alias_generators import to_camel, to_snake

from flowframe.core.environment import is_ci_environment, stdout_color_level
from flowframe.core.errors import ConfigError


class ReportOptions(BaseModel):
    """Options accepted by ``format_report``.

    Keys may be given in snake_case or camelCase (``highlight_code`` or
    ``highlightCode``).
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
        frozen=True,
    )

    color: bool | int = Field(
        default=False,
        description="ANSI styling. Any truthy value (e.g. a color level) enables it.",
    )
    highlight_code: bool = Field(
        default=False,
        description="Syntax-highlight frame source lines. Only applies with color.",
    )
    ci: bool = Field(
        default=False,
        description="Rebase recorded paths onto the working directory.",
    )
    cwd: Path | None = Field(
        default=None,
        description="Directory paths are shown relative to. None uses the process cwd.",
    )
    theme: str = Field(default="monokai", description="Pygments style for highlighted frames.")
    lines_above: int = Field(default=2, ge=0)
    lines_below: int = Field(default=3, ge=0)


def get_default_options() -> ReportOptions:
    """Default options for the current environment.

    Color is off in CI and follows the stdout color level elsewhere; code
    highlighting is always off.
    """
    ci = is_ci_environment()
    return ReportOptions(
        color=False if ci else stdout_color_level(),
        highlight_code=False,
        ci=ci,
    )


def resolve_options(options: ReportOptions | Mapping[str, Any] | None = None) -> ReportOptions:
    """Merge caller options over the defaults; unset keys keep their defaults.

    Raises:
        ConfigError: If an option is unknown or has an invalid value.
    """
    if isinstance(options, ReportOptions):
        return options

    defaults = get_default_options().model_dump()
    overrides = {to_snake(key): value for key, value in (options or {}).items() if value is not None}
    try:
        return ReportOptions.model_validate({**defaults, **overrides})
    except ValidationError as e:
        err = e.errors()[0]
        field = ".".join(str(loc) for loc in err["loc"])
        raise ConfigError.invalid_value(field, err.get("input"), err["msg"]) from e
