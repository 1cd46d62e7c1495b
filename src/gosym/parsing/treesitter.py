"""Tree-sitter parsing of Go source files.

This module provides:
- GoParser: parses Go source into SourceFile records
- Position: 1-based file position, rendered ``file:line:col``
- Node helpers shared by the resolver, the visitor and the printer

Columns follow the Go toolchain convention: 1-based byte offsets within
the line, so positions printed here match ``go vet`` and ``gofmt -l`` output.
"""

from __future__ import annotations

import ast
import threading
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import tree_sitter
import tree_sitter_go

from gosym.core.errors import InvariantError

STRING_LITERAL_TYPES = frozenset({"interpreted_string_literal", "raw_string_literal"})


@dataclass(frozen=True, slots=True)
class Position:
    """Source position of a token. The zero value has an empty filename."""

    filename: str = ""
    line: int = 0
    column: int = 0

    @property
    def is_valid(self) -> bool:
        return bool(self.filename) and self.line > 0

    def __str__(self) -> str:
        return f"{self.filename}:{self.line}:{self.column}"


NO_POSITION = Position()


def node_text(node: Any) -> str:
    return node.text.decode("utf-8") if node.text else ""


def node_key(node: Any) -> tuple[int, int, str]:
    """Identity key for a node within one tree."""
    return (node.start_byte, node.end_byte, node.type)


def same_node(a: Any, b: Any) -> bool:
    return a is not None and b is not None and node_key(a) == node_key(b)


def field_nodes(node: Any, name: str) -> list[Any]:
    """All children stored under a field name (e.g. every ``name`` of a var_spec)."""
    return list(node.children_by_field_name(name))


def named_children(node: Any) -> list[Any]:
    """Named children without comments."""
    return [c for c in node.named_children if c.type != "comment"]


def has_token(node: Any, token: str) -> bool:
    """Whether an anonymous child token (e.g. ``:=``) appears directly under node."""
    return any(not c.is_named and c.type == token for c in node.children)


def literal_to_string(node: Any) -> str:
    """Convert a Go string literal node to its value.

    Raises:
        InvariantError: If the node is not a string literal or cannot be unquoted.
    """
    if node.type not in STRING_LITERAL_TYPES:
        raise InvariantError.violation("expected string", node_type=node.type)
    text = node_text(node)
    if node.type == "raw_string_literal":
        return text[1:-1]
    try:
        value = ast.literal_eval(text)
    except (ValueError, SyntaxError) as e:
        raise InvariantError.violation("cannot unquote", literal=text) from e
    if not isinstance(value, str):
        raise InvariantError.violation("cannot unquote", literal=text)
    return value


@dataclass(frozen=True)
class ImportSpec:
    """One ``import`` spec of a file."""

    path: str
    name: str | None  # explicit name: alias, "." or "_"
    node: Any = field(repr=False, compare=False)

    @property
    def is_dot(self) -> bool:
        return self.name == "."

    @property
    def is_blank(self) -> bool:
        return self.name == "_"


@dataclass
class SourceFile:
    """A parsed Go file."""

    path: str
    content: bytes = field(repr=False)
    tree: Any = field(repr=False)  # Tree-sitter Tree (not serializable)
    package_name: str
    imports: list[ImportSpec]
    error_count: int = 0

    @property
    def root(self) -> Any:
        return self.tree.root_node

    def position(self, node: Any) -> Position:
        row, column = node.start_point
        return Position(self.path, row + 1, column + 1)

    def declarations(self) -> list[Any]:
        """Top-level declarations in source order, without the package clause."""
        return [c for c in named_children(self.root) if c.type != "package_clause"]


def _parse_import_spec(node: Any) -> ImportSpec | None:
    path_node = node.child_by_field_name("path")
    if path_node is None:
        return None
    name_node = node.child_by_field_name("name")
    name = None
    if name_node is not None:
        name = "." if name_node.type == "dot" else node_text(name_node)
    return ImportSpec(path=literal_to_string(path_node), name=name, node=node)


def _collect_imports(root: Any) -> list[ImportSpec]:
    imports: list[ImportSpec] = []
    for decl in root.named_children:
        if decl.type != "import_declaration":
            continue
        for child in decl.named_children:
            specs = child.named_children if child.type == "import_spec_list" else [child]
            for spec_node in specs:
                if spec_node.type != "import_spec":
                    continue
                spec = _parse_import_spec(spec_node)
                if spec is not None:
                    imports.append(spec)
    return imports


def _package_name(root: Any) -> str:
    for child in root.named_children:
        if child.type == "package_clause":
            for c in child.named_children:
                if c.type in ("package_identifier", "identifier"):
                    return node_text(c)
    return ""


def _count_errors(node: Any) -> int:
    count = 1 if node.type == "ERROR" or node.is_missing else 0
    if not node.has_error:
        return count
    for child in node.children:
        count += _count_errors(child)
    return count


class GoParser:
    """Tree-sitter parser for Go source.

    Usage::

        parser = GoParser()
        source = parser.parse(Path("src/example.com/foo/foo.go"))
        for decl in source.declarations():
            ...

    A single tree-sitter Parser is reused; ``parse`` is serialized with a lock
    so one GoParser can back concurrent package loads.
    """

    def __init__(self) -> None:
        self._language = tree_sitter.Language(tree_sitter_go.language())
        self._parser = tree_sitter.Parser(self._language)
        self._lock = threading.Lock()

    def parse(self, path: Path | str, content: bytes | None = None) -> SourceFile:
        """Parse a Go file.

        Args:
            path: Path to the file; used verbatim as the position filename.
            content: File content as bytes. If None, reads from path.
        """
        if content is None:
            content = Path(path).read_bytes()
        with self._lock:
            tree = self._parser.parse(content)
        root = tree.root_node
        return SourceFile(
            path=str(path),
            content=content,
            tree=tree,
            package_name=_package_name(root),
            imports=_collect_imports(root),
            error_count=_count_errors(root),
        )
