"""Function-local scoping.

Package-level names live in ``Package.scope``. Everything declared inside a
function body, a parameter list or a type parameter list is found here by
walking a reference's ancestors outward and collecting the declaring name
nodes visible at the reference, innermost scope first.

A name declared in a block is visible from the end of its statement to the
end of the block, so a block contributes only statements that end before the
reference starts.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any

from gosym.parsing.treesitter import field_nodes, has_token, named_children, same_node
from gosym.types.declare import type_specs, value_specs

BLOCK_TYPES = frozenset(
    {
        "block",
        "statement_list",
        "expression_case",
        "default_case",
        "type_case",
        "communication_case",
    }
)

FUNCTION_TYPES = frozenset({"function_declaration", "method_declaration", "func_literal"})

INITIALIZER_TYPES = frozenset(
    {"if_statement", "expression_switch_statement", "type_switch_statement", "for_clause"}
)

DEFINE = ":="


@dataclass(frozen=True)
class Binding:
    """A declaring name node visible at some reference.

    ``clause`` is set for a type switch alias: each case clause gets its own
    object, typed by the clause's case type.
    """

    name: Any
    clause: Any = None


def identifiers(node: Any) -> list[Any]:
    """Plain identifiers of an expression list (or a lone identifier)."""
    if node is None:
        return []
    if node.type == "identifier":
        return [node]
    return [c for c in named_children(node) if c.type == "identifier"]


def statement_names(stmt: Any) -> list[Any]:
    """Declaring identifiers a statement introduces into its enclosing block."""
    t = stmt.type
    if t == "short_var_declaration":
        return identifiers(stmt.child_by_field_name("left"))
    if t in ("const_declaration", "var_declaration"):
        return [name for spec in value_specs(stmt) for name in field_nodes(spec, "name")]
    if t == "type_declaration":
        return [n for spec in type_specs(stmt) if (n := spec.child_by_field_name("name"))]
    if t == "receive_statement" and has_token(stmt, DEFINE):
        return identifiers(stmt.child_by_field_name("left"))
    if t == "labeled_statement":
        inner = [c for c in named_children(stmt) if c.type != "label_name"]
        return statement_names(inner[0]) if inner else []
    return []


def parameter_names(plist: Any) -> list[Any]:
    if plist is None or plist.type != "parameter_list":
        return []
    names: list[Any] = []
    for param in named_children(plist):
        if param.type in ("parameter_declaration", "variadic_parameter_declaration"):
            names.extend(field_nodes(param, "name"))
    return names


def type_parameter_names(owner: Any) -> list[Any]:
    tparams = owner.child_by_field_name("type_parameters")
    if tparams is None:
        return []
    names: list[Any] = []
    for decl in named_children(tparams):
        if decl.type == "type_parameter_declaration":
            names.extend(field_nodes(decl, "name"))
    return names


def receiver_type_parameters(method: Any) -> list[Any]:
    """Type parameter names a generic receiver declares: ``E`` in ``(l *List[E])``."""
    receiver = method.child_by_field_name("receiver")
    if receiver is None:
        return []
    for param in named_children(receiver):
        type_node = param.child_by_field_name("type")
        while type_node is not None and type_node.type in ("pointer_type", "parenthesized_type"):
            inner = named_children(type_node)
            type_node = inner[0] if inner else None
        if type_node is None or type_node.type != "generic_type":
            return []
        args = type_node.child_by_field_name("type_arguments")
        if args is None:
            return []
        names: list[Any] = []
        for arg in named_children(args):
            # type_arguments wrap each argument in a type_elem
            inner = named_children(arg) if arg.type == "type_elem" else [arg]
            if len(inner) == 1 and inner[0].type == "type_identifier":
                names.append(inner[0])
        return names
    return []


def function_body_names(fn: Any) -> list[Any]:
    """Receiver, parameter and result names: the outermost block of a function body."""
    names: list[Any] = []
    for field in ("receiver", "parameters", "result"):
        names.extend(parameter_names(fn.child_by_field_name(field)))
    return names


def visible_bindings(node: Any) -> Iterator[Binding]:
    """Local declarations visible at ``node``, innermost scope first."""
    pos = node.start_byte
    child, scope = node, node.parent
    while scope is not None and scope.type != "source_file":
        yield from _scope_bindings(scope, child, pos)
        child, scope = scope, scope.parent


def _scope_bindings(scope: Any, child: Any, pos: int) -> Iterator[Binding]:
    t = scope.type
    if t in BLOCK_TYPES:
        for stmt in named_children(scope):
            if stmt.end_byte > pos:
                break
            for name in statement_names(stmt):
                yield Binding(name)
    if t in INITIALIZER_TYPES:
        init = scope.child_by_field_name("initializer")
        if init is not None and not same_node(init, child) and init.end_byte <= pos:
            for name in statement_names(init):
                yield Binding(name)
        if t == "type_switch_statement" and child.type in ("type_case", "default_case"):
            for name in identifiers(scope.child_by_field_name("alias")):
                yield Binding(name, clause=child)
    elif t == "for_statement":
        if same_node(child, scope.child_by_field_name("body")):
            for clause in named_children(scope):
                if clause.type == "for_clause":
                    init = clause.child_by_field_name("initializer")
                    if init is not None:
                        for name in statement_names(init):
                            yield Binding(name)
                elif clause.type == "range_clause" and has_token(clause, DEFINE):
                    for name in identifiers(clause.child_by_field_name("left")):
                        yield Binding(name)
    elif t in FUNCTION_TYPES:
        if same_node(child, scope.child_by_field_name("body")):
            for name in function_body_names(scope):
                yield Binding(name)
        if not same_node(child, scope.child_by_field_name("name")):
            for name in type_parameter_names(scope):
                yield Binding(name)
            if t == "method_declaration":
                for name in receiver_type_parameters(scope):
                    yield Binding(name)
    elif t in ("type_spec", "type_alias"):
        if not same_node(child, scope.child_by_field_name("name")):
            for name in type_parameter_names(scope):
                yield Binding(name)


def declaring_construct(node: Any) -> Any | None:
    """The construct that declares ``node``, if ``node`` is a declaring name.

    Returns the const/var/type declaration, function, parameter list, type
    parameter list, field, interface method, or the short variable, range,
    receive or type switch statement whose left side holds the name.
    """
    parent = node.parent
    if parent is None:
        return None
    pt = parent.type
    if pt in ("const_spec", "var_spec"):
        if not _in_field(parent, "name", node):
            return None
        decl = parent.parent
        while decl is not None and decl.type not in ("const_declaration", "var_declaration"):
            decl = decl.parent
        return decl
    if pt in ("type_spec", "type_alias"):
        return parent.parent if same_node(parent.child_by_field_name("name"), node) else None
    if pt in ("function_declaration", "method_declaration", "method_elem", "method_spec"):
        return parent if same_node(parent.child_by_field_name("name"), node) else None
    if pt in ("parameter_declaration", "variadic_parameter_declaration", "type_parameter_declaration"):
        return parent.parent if _in_field(parent, "name", node) else None
    if pt == "field_declaration":
        return parent if _in_field(parent, "name", node) else None
    if pt == "expression_list":
        owner = parent.parent
        if owner is None:
            return None
        if owner.type == "short_var_declaration":
            left = owner.child_by_field_name("left")
        elif owner.type in ("range_clause", "receive_statement") and has_token(owner, DEFINE):
            left = owner.child_by_field_name("left")
        elif owner.type == "type_switch_statement":
            left = owner.child_by_field_name("alias")
        else:
            return None
        return owner if same_node(left, parent) else None
    return None


def _in_field(parent: Any, field: str, node: Any) -> bool:
    return any(same_node(c, node) for c in field_nodes(parent, field))
