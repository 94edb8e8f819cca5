"""Pydantic configuration models with env var support.

Configuration Hierarchy (highest to lowest precedence):
1. Direct kwargs to load_config()
2. Environment variables (FLOWFRAME__SECTION__KEY)
3. Explicit YAML file (flowframe --config PATH)
4. Project YAML (./.flowframe.yaml)
5. Global YAML (~/.config/flowframe/config.yaml)
6. Built-in defaults (this file)

Environment Variable Format:
    FLOWFRAME__<SECTION>__<KEY>=<VALUE>

Examples:
    FLOWFRAME__LOGGING__LEVEL=DEBUG
    FLOWFRAME__REPORTER__COLOR=false
    FLOWFRAME__REPORTER__HIGHLIGHT_CODE=true
"""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class LogOutputConfig(BaseModel):
    """Single logging output configuration.

    Env vars: Not directly configurable via env (use YAML for multi-output).
    """

    format: Literal["json", "console"] = "console"
    destination: str = "stderr"  # stderr, stdout, or absolute file path
    level: LogLevel | None = None  # Inherits from parent if None

    @field_validator("destination")
    @classmethod
    def validate_destination(cls, v: str) -> str:
        if v in ("stderr", "stdout"):
            return v
        path = Path(v).expanduser()
        if not path.is_absolute():
            raise ValueError(f"File destination must be absolute path: {v}")
        return str(path)


class LoggingConfig(BaseModel):
    """Logging configuration.

    Env vars:
        FLOWFRAME__LOGGING__LEVEL: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """

    level: LogLevel = Field(
        default="WARNING",
        description="Root log level. Anything below WARNING is diagnostic chatter on stderr.",
    )
    outputs: list[LogOutputConfig] = Field(default_factory=lambda: [LogOutputConfig()])


class ReporterConfig(BaseModel):
    """Report rendering configuration.

    Env vars:
        FLOWFRAME__REPORTER__COLOR: Force ANSI styling on/off (unset: detect)
        FLOWFRAME__REPORTER__HIGHLIGHT_CODE: Syntax-highlight frame source lines
        FLOWFRAME__REPORTER__CI: Force CI behavior on/off (unset: detect)
        FLOWFRAME__REPORTER__THEME: Pygments theme used for highlighting
    """

    color: bool | None = Field(
        default=None,
        description="ANSI styling. None detects: off in CI, else stdout color support.",
    )
    highlight_code: bool = Field(
        default=False,
        description="Syntax-highlight source lines in frames. Ignored without color.",
    )
    ci: bool | None = Field(
        default=None,
        description="CI mode (path rebasing onto the working directory). None detects.",
    )
    theme: str = Field(
        default="monokai",
        description="Pygments style name for highlighted frames.",
    )
    lines_above: int = Field(
        default=2,
        description="Source lines shown above the marked range.",
    )
    lines_below: int = Field(
        default=3,
        description="Source lines shown below the marked range.",
    )

    @field_validator("lines_above", "lines_below")
    @classmethod
    def validate_context_lines(cls, v: int) -> int:
        if v < 0:
            raise ValueError(f"Context lines must be >= 0, got {v}")
        return v


class FlowFrameConfig(BaseModel):
    """Root configuration for flowframe.

    All settings can be configured via:
    1. Environment variables: FLOWFRAME__SECTION__KEY
    2. YAML config files (explicit, project or global)
    3. Direct kwargs to load_config()
    """

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    reporter: ReporterConfig = Field(default_factory=ReporterConfig)
