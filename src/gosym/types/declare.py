"""Object creation for declaration syntax.

Shared by package loading (package-level declarations) and the resolver
(declarations inside function bodies).
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import TYPE_CHECKING, Any

from gosym.parsing.treesitter import SourceFile, field_nodes, named_children, node_text
from gosym.packages.models import object_key
from gosym.symbols.kinds import ObjectKind
from gosym.types.objects import Declaration, DeclForm, Object

if TYPE_CHECKING:
    from gosym.packages.models import Package

BLANK = "_"

DeclaredName = tuple[Any, Object]


def value_specs(decl: Any) -> Iterator[Any]:
    """const_spec / var_spec nodes of a const or var declaration, in order."""
    for child in named_children(decl):
        if child.type in ("const_spec", "var_spec"):
            yield child
        elif child.type == "var_spec_list":
            yield from (c for c in named_children(child) if c.type == "var_spec")


def type_specs(decl: Any) -> Iterator[Any]:
    for child in named_children(decl):
        if child.type in ("type_spec", "type_alias"):
            yield child


def declare_value_specs(
    decl: Any, file: SourceFile, package: Package | None
) -> list[DeclaredName]:
    """Objects for every name of a const or var declaration.

    Constant specs without type and value repeat the previous spec's type and
    value expressions (``const ( A T = iota; B; C )``).
    """
    kind = ObjectKind.CONST if decl.type == "const_declaration" else ObjectKind.VAR
    form = DeclForm.CONST if kind is ObjectKind.CONST else DeclForm.VAR
    declared: list[DeclaredName] = []
    last_type: Any = None
    last_values: list[Any] = []
    for spec in value_specs(decl):
        type_node = spec.child_by_field_name("type")
        value_list = spec.child_by_field_name("value")
        values = named_children(value_list) if value_list is not None else []
        if kind is ObjectKind.CONST:
            if type_node is None and not values:
                type_node, values = last_type, last_values
            else:
                last_type, last_values = type_node, values
        names = field_nodes(spec, "name")
        for i, name in enumerate(names):
            value, index = value_for(values, len(names), i)
            obj = Object(
                name=node_text(name),
                kind=kind,
                pos=file.position(name),
                node=name,
                decl=Declaration(form, file, spec, type_node, value, index),
                package=package,
            )
            declared.append((name, obj))
    return declared


def value_for(values: list[Any], name_count: int, i: int) -> tuple[Any, int]:
    if len(values) == name_count:
        return values[i], 0
    if len(values) == 1:
        return values[0], i
    return None, 0


def declare_type_specs(
    decl: Any, file: SourceFile, package: Package | None
) -> list[DeclaredName]:
    declared: list[DeclaredName] = []
    for spec in type_specs(decl):
        name = spec.child_by_field_name("name")
        if name is None:
            continue
        obj = Object(
            name=node_text(name),
            kind=ObjectKind.TYPE,
            pos=file.position(name),
            node=name,
            decl=Declaration(DeclForm.TYPE, file, spec, spec.child_by_field_name("type")),
            package=package,
        )
        declared.append((name, obj))
    return declared


def declare_function(decl: Any, file: SourceFile, package: Package | None) -> DeclaredName | None:
    name = decl.child_by_field_name("name")
    if name is None:
        return None
    form = DeclForm.METHOD if decl.type == "method_declaration" else DeclForm.FUNC
    obj = Object(
        name=node_text(name),
        kind=ObjectKind.FUNC,
        pos=file.position(name),
        node=name,
        decl=Declaration(form, file, decl),
        package=package,
    )
    return name, obj


def receiver_type_name(method: Any) -> str | None:
    """Base type name of a method receiver: ``T`` for ``(t *T)`` or ``(l *List[E])``."""
    receiver = method.child_by_field_name("receiver")
    if receiver is None:
        return None
    params = [c for c in named_children(receiver) if c.type == "parameter_declaration"]
    if not params:
        return None
    type_node = params[0].child_by_field_name("type")
    while type_node is not None:
        if type_node.type == "type_identifier":
            return node_text(type_node)
        if type_node.type in ("pointer_type", "parenthesized_type"):
            inner = named_children(type_node)
            type_node = inner[0] if inner else None
        elif type_node.type == "generic_type":
            type_node = type_node.child_by_field_name("type")
        else:
            return None
    return None


def declare_package(package: Package) -> None:
    """Populate the package scope, method index and object registry."""
    for file in package.files:
        for decl in file.declarations():
            declared: list[DeclaredName] = []
            if decl.type in ("const_declaration", "var_declaration"):
                declared = declare_value_specs(decl, file, package)
            elif decl.type == "type_declaration":
                declared = declare_type_specs(decl, file, package)
            elif decl.type == "function_declaration":
                fn = declare_function(decl, file, package)
                # init functions are not declared in the package block
                if fn is not None and fn[1].name != "init":
                    declared = [fn]
            elif decl.type == "method_declaration":
                method = declare_function(decl, file, package)
                type_name = receiver_type_name(decl)
                if method is not None:
                    name, obj = method
                    package.objects[object_key(file, name)] = obj
                    if type_name is not None and obj.name != BLANK:
                        package.methods.setdefault(type_name, {}).setdefault(obj.name, obj)
                continue
            for name, obj in declared:
                package.objects[object_key(file, name)] = obj
                if obj.name != BLANK:
                    package.scope.setdefault(obj.name, obj)
