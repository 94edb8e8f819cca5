"""flowframe error types with typed error codes.

Error code ranges:
- 2xxx: Config
- 3xxx: Report input
- 4xxx: Source files
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any


class ErrorCode(IntEnum):
    """Typed error codes for programmatic handling."""

    # Config (2xxx)
    CONFIG_PARSE_ERROR = 2001
    CONFIG_INVALID_VALUE = 2002
    CONFIG_FILE_NOT_FOUND = 2004

    # Report input (3xxx)
    REPORT_INVALID_JSON = 3001
    REPORT_MALFORMED = 3002
    REPORT_MISSING_ERRORS = 3003
    REPORT_EMPTY = 3004

    # Source files (4xxx)
    SOURCE_READ_FAILED = 4001


@dataclass(frozen=True, slots=True)
class FlowFrameError(Exception):
    """Base error with structured context."""

    code: ErrorCode
    message: str
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def error_name(self) -> str:
        """String identifier for logging (e.g., 'REPORT_INVALID_JSON')."""
        return self.code.name

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.code.value,
            "error": self.error_name,
            "message": self.message,
            "details": self.details,
        }

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.error_name}: {self.message}"


class ConfigError(FlowFrameError):
    """Configuration-related errors."""

    @classmethod
    def parse_error(cls, path: str, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_PARSE_ERROR,
            message=f"Failed to parse config at {path}: {reason}",
            details={"path": path, "reason": reason},
        )

    @classmethod
    def invalid_value(cls, field: str, value: Any, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_INVALID_VALUE,
            message=f"Invalid value for '{field}': {reason}",
            details={"field": field, "value": str(value), "reason": reason},
        )

    @classmethod
    def file_not_found(cls, path: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_FILE_NOT_FOUND,
            message=f"Config file not found: {path}",
            details={"path": path},
        )


class ParseError(FlowFrameError):
    """The report text is not valid JSON."""

    @classmethod
    def invalid_json(cls, reason: str, line: int | None = None, column: int | None = None) -> "ParseError":
        return cls(
            code=ErrorCode.REPORT_INVALID_JSON,
            message=f"Report is not valid JSON: {reason}",
            details={"reason": reason, "line": line, "column": column},
        )


class MalformedReportError(FlowFrameError):
    """The decoded report does not have the expected shape."""

    @classmethod
    def invalid_shape(cls, field: str, reason: str) -> "MalformedReportError":
        return cls(
            code=ErrorCode.REPORT_MALFORMED,
            message=f"Malformed report at '{field}': {reason}",
            details={"field": field, "reason": reason},
        )

    @classmethod
    def missing_errors(cls) -> "MalformedReportError":
        return cls(
            code=ErrorCode.REPORT_MISSING_ERRORS,
            message="Report did not pass but has no 'errors' list",
        )

    @classmethod
    def empty_input(cls, kind: str) -> "MalformedReportError":
        return cls(
            code=ErrorCode.REPORT_EMPTY,
            message=f"Expected a JSON string or a mapping, got empty {kind}",
            details={"kind": kind},
        )


class FileReadError(FlowFrameError):
    """A source file referenced by the report could not be read."""

    @classmethod
    def unreadable(cls, path: str, reason: str) -> "FileReadError":
        return cls(
            code=ErrorCode.SOURCE_READ_FAILED,
            message=f"Cannot read source file {path}: {reason}",
            details={"path": path, "reason": reason},
        )

