"""Config module exports."""

from gosym.config.loader import load_config
from gosym.config.models import (
    GosymConfig,
    LoggingConfig,
    LogOutputConfig,
    ScanOptions,
    SearchPathConfig,
)

__all__ = [
    "load_config",
    "GosymConfig",
    "LoggingConfig",
    "LogOutputConfig",
    "ScanOptions",
    "SearchPathConfig",
]
