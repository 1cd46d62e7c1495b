"""Locating and loading Go packages from the search roots.

An import path is looked up under each search root in order
(``<GOPATH entry>/src`` for every GOPATH entry, then ``<GOROOT>/src``). Paths
beginning with ``.`` or ``/`` name a directory directly, and ``_``-prefixed
paths are the form Go gives directories outside every root.

Build constraints are not evaluated: every non-test ``.go`` file of the
directory is parsed and the package name shared by most files wins.
"""

from __future__ import annotations

from collections import Counter
from pathlib import Path

import structlog

from gosym.config.constants import GO_FILE_SUFFIX, GO_TEST_FILE_SUFFIX, LOCAL_IMPORT_PREFIX
from gosym.config.models import SearchPathConfig
from gosym.core.errors import PackageError
from gosym.packages.models import Package
from gosym.parsing.treesitter import GoParser
from gosym.types.declare import declare_package

logger = structlog.get_logger()


def is_local_path(path: str) -> bool:
    """Whether a command-line package argument names a directory directly."""
    return path.startswith(".") or path.startswith("/")


def is_go_source(path: Path) -> bool:
    name = path.name
    return (
        path.is_file()
        and name.endswith(GO_FILE_SUFFIX)
        and not name.endswith(GO_TEST_FILE_SUFFIX)
        and not name.startswith((".", "_"))
    )


class GoImporter:
    """Loads packages by import path.

    Usage::

        importer = GoImporter(config.search)
        package = importer.load("example.com/foo")  # raises PackageError
    """

    def __init__(self, search: SearchPathConfig, parser: GoParser | None = None) -> None:
        self._roots = search.roots
        self._parser = parser or GoParser()

    @property
    def roots(self) -> list[Path]:
        return list(self._roots)

    def find(self, import_path: str) -> Path:
        """Directory holding the package's source.

        Raises:
            PackageError: If no search root contains the import path.
        """
        if is_local_path(import_path):
            directory = Path(import_path)
            if directory.is_dir():
                return directory
        elif import_path.startswith(LOCAL_IMPORT_PREFIX + "/"):
            directory = Path(import_path[len(LOCAL_IMPORT_PREFIX) :])
            if directory.is_dir():
                return directory
        else:
            for root in self._roots:
                directory = root / import_path
                if directory.is_dir():
                    return directory
        raise PackageError.not_found(import_path, [str(r) for r in self._roots])

    def load(self, import_path: str) -> Package:
        """Parse and declare the package at ``import_path``.

        Raises:
            PackageError: If the package cannot be found or has no Go files.
        """
        directory = self.find(import_path)
        paths = sorted(p for p in directory.iterdir() if is_go_source(p))
        if not paths:
            raise PackageError.no_go_files(import_path, str(directory))

        files = [self._parser.parse(path) for path in paths]
        for file in files:
            if file.error_count:
                logger.debug("package.syntax_errors", file=file.path, errors=file.error_count)

        names = Counter(f.package_name for f in files if f.package_name)
        name = names.most_common(1)[0][0] if names else ""
        if len(names) > 1:
            logger.warning("package.mixed_names", import_path=import_path, names=sorted(names), chosen=name)

        package = Package(
            import_path=import_path,
            name=name,
            directory=directory,
            files=[f for f in files if f.package_name == name],
        )
        declare_package(package)
        logger.debug(
            "package.loaded",
            import_path=import_path,
            name=name,
            files=len(package.files),
            scope=len(package.scope),
        )
        return package
