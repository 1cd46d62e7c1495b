"""Fixtures for resolver tests: in-memory packages, no filesystem."""

from collections.abc import Iterator
from pathlib import Path
from typing import Any

import pytest

from gosym.packages.models import Package
from gosym.parsing.treesitter import GoParser, SourceFile, node_text
from gosym.types.declare import declare_package
from gosym.types.resolver import TypeResolver


def iter_nodes(node: Any) -> Iterator[Any]:
    yield node
    for child in node.children:
        yield from iter_nodes(child)


class Workspace:
    """Packages parsed from strings, served to a resolver by import path."""

    def __init__(self, parser: GoParser) -> None:
        self._parser = parser
        self.packages: dict[str, Package] = {}
        self.resolver = TypeResolver(self.packages.get)

    def add(self, import_path: str, files: dict[str, str]) -> Package:
        parsed = [
            self._parser.parse(f"/ws/src/{import_path}/{name}", content.encode())
            for name, content in files.items()
        ]
        package = Package(
            import_path=import_path,
            name=parsed[0].package_name,
            directory=Path("/ws/src", import_path),
            files=parsed,
        )
        declare_package(package)
        self.packages[import_path] = package
        self.resolver.bind(package)
        return package

    def find(self, file: SourceFile, text: str, node_type: str | None = None, nth: int = 0) -> Any:
        """The ``nth`` node (source order) whose text is ``text``."""
        matches = [
            n
            for n in iter_nodes(file.root)
            if node_text(n) == text and (node_type is None or n.type == node_type)
        ]
        assert len(matches) > nth, f"only {len(matches)} nodes match {text!r}"
        return matches[nth]


@pytest.fixture(scope="session")
def go_parser() -> GoParser:
    return GoParser()


@pytest.fixture
def workspace(go_parser: GoParser) -> Workspace:
    return Workspace(go_parser)
