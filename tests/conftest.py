"""Root conftest.py for test configuration.

Ensures local src/ directory takes priority over any installed packages, and
provides fake GOPATH workspaces built under tmp_path.
"""

import logging
import sys
from collections.abc import Callable, Iterator
from pathlib import Path

import pytest
import structlog

# Insert local src directory at the beginning of sys.path
# This ensures that the local gosym package is used, not any installed one
_src_dir = Path(__file__).parent.parent / "src"
if str(_src_dir) not in sys.path:
    sys.path.insert(0, str(_src_dir))

# Force reimport of gosym modules if already imported
for module_name in list(sys.modules.keys()):
    if module_name.startswith("gosym"):
        del sys.modules[module_name]

from gosym.config.models import GosymConfig, SearchPathConfig  # noqa: E402

WritePackage = Callable[[str, dict[str, str]], Path]


@pytest.fixture(autouse=True)
def _reset_logging() -> Iterator[None]:
    """Drop handlers bound to streams a test (or CliRunner) has closed."""
    yield
    structlog.reset_defaults()
    logging.getLogger().handlers.clear()


@pytest.fixture
def gopath(tmp_path: Path) -> Path:
    """An empty GOPATH workspace (``<gopath>/src`` exists)."""
    root = tmp_path / "gopath"
    (root / "src").mkdir(parents=True)
    return root


@pytest.fixture
def write_package(gopath: Path) -> WritePackage:
    """Write Go files for an import path under the fake GOPATH.

    Usage::

        directory = write_package("example.com/foo", {"foo.go": "package foo\\n"})
    """

    def _write(import_path: str, files: dict[str, str]) -> Path:
        directory = gopath / "src" / import_path
        directory.mkdir(parents=True, exist_ok=True)
        for name, content in files.items():
            (directory / name).write_text(content)
        return directory

    return _write


@pytest.fixture
def config(gopath: Path) -> GosymConfig:
    """Configuration whose only search root is the fake GOPATH."""
    return GosymConfig(search=SearchPathConfig(gopath=str(gopath)))
