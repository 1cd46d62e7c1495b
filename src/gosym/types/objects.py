"""Resolved entities: declared objects, their declarations, and types.

An ``Object`` is one declared Go entity (constant, type, variable, function,
method, struct field or import name). Objects compare by identity: the
universe check asks whether looking a name up in the universe scope yields
the very same object.

A ``Type`` is a type *expression* plus the file it must be interpreted in.
Types the source never spells out (``&x``, variadic parameters) are the
spelled-out node plus ``wrappers`` applied on top, outermost first.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import TYPE_CHECKING, Any

from gosym.parsing.printer import render_node, render_signature
from gosym.parsing.treesitter import Position, SourceFile, named_children
from gosym.symbols.kinds import ObjectKind

if TYPE_CHECKING:
    from gosym.packages.models import Package

POINTER = "*"
SLICE = "[]"

SIGNATURE_NODE_TYPES = frozenset(
    {
        "function_declaration",
        "method_declaration",
        "func_literal",
        "function_type",
        "method_elem",
        "method_spec",
    }
)


class DeclForm(str, Enum):
    """Syntactic form an object was declared by."""

    FUNC = "func"
    METHOD = "method"
    TYPE = "type"
    TYPE_PARAM = "type_param"
    CONST = "const"
    VAR = "var"
    PARAM = "param"
    VARIADIC = "variadic"
    RANGE = "range"
    RECEIVE = "receive"
    TYPE_SWITCH = "type_switch"
    FIELD = "field"
    METHOD_ELEM = "method_elem"
    IMPORT = "import"
    PREDECLARED = "predeclared"


@dataclass(frozen=True, eq=False)
class Declaration:
    """Where and how an object was declared.

    ``type_node`` is the explicit type if one is spelled out. Otherwise the
    type is inferred from ``value_node``; ``index`` selects the position in a
    multi-value right-hand side (``a, b := f()``, ``k, v := range m``).
    """

    form: DeclForm
    file: SourceFile
    node: Any  # declaring construct (spec, parameter, function, ...)
    type_node: Any = None
    value_node: Any = None
    index: int = 0


@dataclass(eq=False)
class Object:
    """A declared entity."""

    name: str
    kind: ObjectKind
    pos: Position | None = None
    decl: Declaration | None = None
    node: Any = field(default=None, repr=False, compare=False)  # declaring name node
    package: Package | None = field(default=None, repr=False)  # declaring package
    import_path: str | None = None  # PACKAGE objects only

    def __repr__(self) -> str:
        return f"Object({self.kind.value} {self.name} @ {self.pos})"


@dataclass(frozen=True, eq=False)
class Type:
    """A type expression in the context of the file that spells it."""

    kind: ObjectKind
    node: Any = None
    file: SourceFile | None = None
    wrappers: tuple[str, ...] = ()
    package: Package | None = field(default=None, repr=False)  # PACKAGE types only

    def with_kind(self, kind: ObjectKind) -> Type:
        return replace(self, kind=kind)

    def pointer_to(self) -> Type:
        return replace(self, wrappers=(POINTER, *self.wrappers))

    def slice_of(self) -> Type:
        return replace(self, wrappers=(SLICE, *self.wrappers))

    def depointer(self) -> Type:
        """Strip exactly one level of pointer indirection, if present."""
        if self.wrappers:
            if self.wrappers[0] == POINTER:
                return replace(self, wrappers=self.wrappers[1:])
            return self
        if self.node is not None and self.node.type == "pointer_type":
            inner = named_children(self.node)
            if inner:
                return replace(self, node=inner[0])
        return self

    def render(self) -> str:
        if self.kind is ObjectKind.PACKAGE and self.package is not None:
            return self.package.import_path
        if self.node is None:
            return ""
        if self.node.type in SIGNATURE_NODE_TYPES:
            base = render_signature(self.node)
        else:
            base = render_node(self.node)
        return "".join(self.wrappers) + base
