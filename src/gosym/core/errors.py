"""gosym error types with typed error codes.

Error code ranges:
- 2xxx: Config
- 3xxx: Package loading
- 4xxx: Symbol line parsing
- 9xxx: Internal / invariant violations
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any


class ErrorCode(IntEnum):
    """Typed error codes for programmatic handling."""

    # Config (2xxx)
    CONFIG_PARSE_ERROR = 2001
    CONFIG_INVALID_VALUE = 2002
    CONFIG_UNKNOWN_KIND = 2003

    # Packages (3xxx)
    PACKAGE_NOT_FOUND = 3001
    PACKAGE_NO_GO_FILES = 3002

    # Symbol lines (4xxx)
    LINE_INVALID = 4001
    LINE_INVALID_KIND = 4002

    # Internal (9xxx)
    INTERNAL_INVARIANT = 9001


@dataclass(frozen=True, slots=True)
class GosymError(Exception):
    """Base error with structured context."""

    code: ErrorCode
    message: str
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def error_name(self) -> str:
        """String identifier for logging (e.g., 'CONFIG_UNKNOWN_KIND')."""
        return self.code.name

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON log output."""
        return {
            "code": self.code.value,
            "error": self.error_name,
            "message": self.message,
            "details": self.details,
        }

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.error_name}: {self.message}"


class ConfigError(GosymError):
    """Configuration-related errors. The CLI reports these as usage errors."""

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
    def unknown_kind(cls, token: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_UNKNOWN_KIND,
            message=f"unknown type kind {token!r}",
            details={"kind": token},
        )


class PackageError(GosymError):
    """A package could not be located or loaded."""

    @classmethod
    def not_found(cls, import_path: str, roots: list[str]) -> "PackageError":
        return cls(
            code=ErrorCode.PACKAGE_NOT_FOUND,
            message=f"cannot find package {import_path!r}",
            details={"import_path": import_path, "roots": roots},
        )

    @classmethod
    def no_go_files(cls, import_path: str, directory: str) -> "PackageError":
        return cls(
            code=ErrorCode.PACKAGE_NO_GO_FILES,
            message=f"no Go source files for {import_path!r} in {directory}",
            details={"import_path": import_path, "directory": directory},
        )


class LineParseError(GosymError):
    """A serialized symbol line does not match the line grammar."""

    @property
    def line(self) -> str:
        return str(self.details.get("line", ""))

    @classmethod
    def invalid_line(cls, line: str) -> "LineParseError":
        return cls(
            code=ErrorCode.LINE_INVALID,
            message=f"invalid line {line!r}",
            details={"line": line},
        )

    @classmethod
    def invalid_kind(cls, line: str, token: str) -> "LineParseError":
        return cls(
            code=ErrorCode.LINE_INVALID_KIND,
            message=f"invalid kind {token!r}",
            details={"line": line, "kind": token},
        )


class InternalError(GosymError):
    """Internal errors: bugs rather than bad input."""


class InvariantError(InternalError):
    """A state that correct upstream behavior can never produce. Fatal."""

    @classmethod
    def violation(cls, reason: str, **details: Any) -> "InvariantError":
        return cls(
            code=ErrorCode.INTERNAL_INVARIANT,
            message=reason,
            details=details,
        )
