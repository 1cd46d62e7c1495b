"""Pydantic configuration models with env var support.

Configuration Hierarchy (highest to lowest precedence):
1. Direct kwargs to load_config()
2. Environment variables (GOPATH, GOROOT, GOSYM__LOGGING__LEVEL)
3. Global YAML (~/.config/gosym/config.yaml)
4. Built-in defaults (this file)

Environment Variable Format:
    GOPATH=/home/me/go:/opt/go-vendor
    GOROOT=/usr/local/go
    GOSYM__LOGGING__LEVEL=INFO
"""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from gosym.config.constants import GOPATH_ENTRY_SUBDIR, GOROOT_SUBDIR
from gosym.symbols.kinds import KindMask

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
        GOSYM__LOGGING__LEVEL: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """

    level: LogLevel = Field(
        default="WARNING",
        description="Root log level. INFO adds unresolved-symbol diagnostics.",
    )
    outputs: list[LogOutputConfig] = Field(default_factory=lambda: [LogOutputConfig()])


class SearchPathConfig(BaseModel):
    """Package search roots.

    Env vars:
        GOPATH: Colon-separated workspace list; each entry contributes <entry>/src
        GOROOT: Toolchain root; contributes <GOROOT>/src after the GOPATH roots
    """

    gopath: str = Field(default="", description="Colon-separated GOPATH value.")
    goroot: str | None = Field(default=None, description="GOROOT value.")

    @property
    def roots(self) -> list[Path]:
        """Search roots in lookup order."""
        roots = [Path(entry) / GOPATH_ENTRY_SUBDIR for entry in self.gopath.split(":") if entry]
        if self.goroot:
            roots.append(Path(self.goroot) / GOROOT_SUBDIR)
        return roots


class ScanOptions(BaseModel):
    """Per-run switches, threaded explicitly through the scanner."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    verbose: bool = Field(default=False, description="Log unresolved symbols.")
    print_type: bool = Field(default=False, description="Append the rendered type to each line.")
    include_all: bool = Field(default=False, description="Also print universe symbols.")
    kinds: KindMask = Field(default_factory=KindMask.all, description="Kinds to print.")


class GosymConfig(BaseModel):
    """Root configuration model."""

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    search: SearchPathConfig = Field(default_factory=SearchPathConfig)
