"""Core module exports."""

from flowframe.core.environment import is_ci_environment, stdout_color_level
from flowframe.core.errors import (
    ConfigError,
    ErrorCode,
    FileReadError,
    FlowFrameError,
    MalformedReportError,
    ParseError,
)
from flowframe.core.logging import configure_logging, get_logger

__all__ = [
    # Errors
    "ConfigError",
    "ErrorCode",
    "FileReadError",
    "FlowFrameError",
    "MalformedReportError",
    "ParseError",
    # Logging
    "configure_logging",
    "get_logger",
    # Environment
    "is_ci_environment",
    "stdout_color_level",
]
