"""Core module exports."""

from gosym.core.errors import (
    ConfigError,
    ErrorCode,
    GosymError,
    InternalError,
    InvariantError,
    LineParseError,
    PackageError,
)
from gosym.core.logging import (
    clear_run_id,
    configure_logging,
    get_logger,
    get_run_id,
    set_run_id,
)

__all__ = [
    # Errors
    "ConfigError",
    "ErrorCode",
    "GosymError",
    "InternalError",
    "InvariantError",
    "LineParseError",
    "PackageError",
    # Logging
    "clear_run_id",
    "configure_logging",
    "get_logger",
    "get_run_id",
    "set_run_id",
]
