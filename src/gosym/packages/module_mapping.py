"""File position -> owning import path.

Converts between source file locations (e.g. ``/home/me/go/src/example.com/foo/foo.go``)
and Go import paths (e.g. ``example.com/foo``). A file belongs to the package
of its directory; the import path is that directory relative to the first
search root containing it. Directories outside every root get Go's local
import path form: ``_`` followed by the absolute directory.
"""

from __future__ import annotations

import threading
from pathlib import Path

from gosym.config.constants import LOCAL_IMPORT_PREFIX
from gosym.core.errors import InvariantError
from gosym.parsing.treesitter import Position


def directory_to_import_path(directory: Path, roots: list[Path]) -> str:
    """Import path of an absolute directory.

    Examples:
        >>> directory_to_import_path(Path("/go/src/example.com/foo"), [Path("/go/src")])
        'example.com/foo'
        >>> directory_to_import_path(Path("/tmp/scratch"), [Path("/go/src")])
        '_/tmp/scratch'
    """
    for root in roots:
        try:
            relative = directory.relative_to(root)
        except ValueError:
            continue
        if relative.parts:
            return relative.as_posix()
    return LOCAL_IMPORT_PREFIX + directory.as_posix()


class PackageMapper:
    """Maps positions to the import path of the package that owns them.

    Results are memoized per directory; the mapper may be shared across
    threads.
    """

    def __init__(self, roots: list[Path]) -> None:
        self._roots = [_absolute(r) for r in roots]
        self._owners: dict[str, str] = {}
        self._lock = threading.Lock()

    def owner_of(self, pos: Position) -> str:
        """Import path of the package containing ``pos``.

        Raises:
            InvariantError: If the position has no file name, or its directory
                no longer exists. Positions reaching the mapper come from
                files that were just parsed, so neither can legitimately happen.
        """
        if not pos.filename:
            raise InvariantError.violation("empty file name")
        directory = Path(pos.filename).parent
        key = str(directory)
        with self._lock:
            owner = self._owners.get(key)
        if owner is not None:
            return owner
        if not directory.is_dir():
            raise InvariantError.violation(
                "cannot reverse-map filename to package", filename=pos.filename
            )
        owner = directory_to_import_path(_absolute(directory), self._roots)
        with self._lock:
            self._owners[key] = owner
        return owner


def _absolute(path: Path) -> Path:
    return path.expanduser().resolve()
