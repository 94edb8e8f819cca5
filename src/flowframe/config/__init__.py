"""Config module exports."""

from flowframe.config.loader import load_config
from flowframe.config.models import (
    FlowFrameConfig,
    LoggingConfig,
    LogOutputConfig,
    ReporterConfig,
)

__all__ = [
    "load_config",
    "FlowFrameConfig",
    "LoggingConfig",
    "LogOutputConfig",
    "ReporterConfig",
]
