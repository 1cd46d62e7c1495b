"""Thread-safe single-flight package cache.

Each import path is loaded at most once per process. The first caller for a
path becomes its owner and runs the loader; concurrent callers for the same
path wait on the owner's future instead of loading again. Callers for other
paths never wait on each other: the lock only guards the table, never a load.

A failed load (loader returned None or raised PackageError) is cached as
None, so a bad import is reported once rather than on every reference.
"""

from __future__ import annotations

import threading
from collections.abc import Callable
from concurrent.futures import Future

import structlog

from gosym.core.errors import PackageError
from gosym.packages.models import Package

logger = structlog.get_logger()

Loader = Callable[[str], "Package | None"]


class PackageCache:
    """Memoizes ``loader`` per import path.

    Usage::

        cache = PackageCache(GoImporter(config.search).load)
        pkg = cache.get("example.com/foo")
    """

    def __init__(self, loader: Loader) -> None:
        self._loader = loader
        self._entries: dict[str, Future[Package | None]] = {}
        self._lock = threading.Lock()

    def get(self, path: str) -> Package | None:
        """Return the package for ``path``, loading it on first use."""
        with self._lock:
            future = self._entries.get(path)
            owner = future is None
            if future is None:
                future = Future()
                self._entries[path] = future

        if not owner:
            return future.result()

        try:
            package = self._loader(path)
        except PackageError as e:
            logger.warning("package.load_failed", path=path, error=e.message)
            package = None
        except BaseException as e:
            # waiters must not block on a load that will never finish
            future.set_exception(e)
            raise
        future.set_result(package)
        return package

    def __contains__(self, path: object) -> bool:
        with self._lock:
            return path in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
