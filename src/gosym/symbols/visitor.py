"""Depth-first traversal of a Go file producing candidate symbol expressions.

The walk visits top-level declarations in source order and hands every
identifier and selector expression to a callback. A ``Walk`` value is
returned through every level of the recursion; once any step produces
``Walk.STOP_FILE`` nothing more of the file is visited.
"""

from __future__ import annotations

from collections.abc import Callable
from enum import Enum
from typing import Any

import structlog

from gosym.parsing.treesitter import SourceFile, named_children, node_text

logger = structlog.get_logger()


class Walk(Enum):
    """Continuation signal of the traversal."""

    CONTINUE = "continue"
    STOP_FILE = "stop_file"


class ExprForm(str, Enum):
    IDENTIFIER = "identifier"
    SELECTOR = "selector"


LEAF_TYPES = frozenset(
    {
        "identifier",
        "type_identifier",
        "field_identifier",
        "package_identifier",
        "true",
        "false",
        "nil",
        "iota",
    }
)
SELECTOR_TYPES = frozenset({"selector_expression", "qualified_type"})

# never references, never worth descending into
_SKIPPED_TYPES = frozenset(
    {
        "comment",
        "blank_identifier",
        "label_name",
        "package_clause",
        "interpreted_string_literal",
        "raw_string_literal",
        "rune_literal",
        "int_literal",
        "float_literal",
        "imaginary_literal",
    }
)

Visit = Callable[[Any, ExprForm], Walk]
DeclareInit = Callable[[Any], object]


def is_init_function(node: Any) -> bool:
    """A receiver-less, parameterless ``func init()``."""
    if node.type != "function_declaration":
        return False
    name = node.child_by_field_name("name")
    params = node.child_by_field_name("parameters")
    return (
        name is not None
        and node_text(name) == "init"
        and (params is None or not named_children(params))
    )


def selector_parts(node: Any) -> tuple[Any, Any]:
    """(base, selected name) of a selector or qualified type."""
    if node.type == "qualified_type":
        return node.child_by_field_name("package"), node.child_by_field_name("name")
    return node.child_by_field_name("operand"), node.child_by_field_name("field")


class TraversalVisitor:
    """Walks one file, calling ``visit`` for each identifier and selector.

    Args:
        file: Parsed source file.
        visit: Called with each candidate node and its form. Returning
            ``Walk.STOP_FILE`` ends the walk of this file.
        declare_init: Called with each ``init`` function declaration before
            its name is visited, so the name can resolve.
    """

    def __init__(self, file: SourceFile, visit: Visit, declare_init: DeclareInit | None = None) -> None:
        self.file = file
        self._visit = visit
        self._declare_init = declare_init

    def walk_file(self) -> Walk:
        for decl in self.file.declarations():
            if self.walk(decl) is Walk.STOP_FILE:
                return Walk.STOP_FILE
        return Walk.CONTINUE

    def walk(self, node: Any) -> Walk:
        t = node.type
        if t in _SKIPPED_TYPES:
            return Walk.CONTINUE
        if t == "import_spec":
            return self._import_spec(node)
        if t in LEAF_TYPES:
            return self._visit(node, ExprForm.IDENTIFIER)
        if t == "keyed_element":
            value = node.child_by_field_name("value")
            if value is None:
                children = named_children(node)
                value = children[-1] if len(children) > 1 else None
            return self.walk(value) if value is not None else Walk.CONTINUE
        if t in SELECTOR_TYPES:
            base, _ = selector_parts(node)
            if base is not None and self.walk(base) is Walk.STOP_FILE:
                return Walk.STOP_FILE
            return self._visit(node, ExprForm.SELECTOR)
        if self._declare_init is not None and is_init_function(node):
            self._declare_init(node)
        for child in named_children(node):
            if self.walk(child) is Walk.STOP_FILE:
                return Walk.STOP_FILE
        return Walk.CONTINUE

    def _import_spec(self, node: Any) -> Walk:
        name = node.child_by_field_name("name")
        if name is not None and name.type == "dot":
            logger.warning("import to . not supported", file=self.file.path, line=node.start_point[0] + 1)
            return Walk.STOP_FILE
        return Walk.CONTINUE


def walk_file(file: SourceFile, visit: Visit, declare_init: DeclareInit | None = None) -> Walk:
    """Walk ``file`` with a fresh visitor. See ``TraversalVisitor``."""
    return TraversalVisitor(file, visit, declare_init).walk_file()
