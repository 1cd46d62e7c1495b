"""Single-line rendering of Go syntax nodes.

Symbol lines hold exactly one record per line, so every rendering here
collapses the source layout: parameter lists are joined with ``", "`` and
struct/interface members with ``"; "`` (the form ``gofmt`` uses for
one-line composite types).
"""

from __future__ import annotations

from typing import Any

from gosym.parsing.treesitter import field_nodes, has_token, named_children, node_text

_SIGNATURE_NODES = frozenset(
    {"function_declaration", "method_declaration", "func_literal", "method_elem", "method_spec"}
)


def _collapse(text: str) -> str:
    return " ".join(text.split())


def render_signature(node: Any) -> str:
    """Render a function-like node as its ``func(...) result`` type."""
    params = node.child_by_field_name("parameters")
    result = node.child_by_field_name("result")
    text = "func" + (render_node(params) if params is not None else "()")
    if result is not None:
        text += " " + render_node(result)
    return text


def render_node(node: Any) -> str:
    """Render a type or expression node on one line."""
    kind = node.type
    if kind == "parameter_list":
        return "(" + ", ".join(render_node(c) for c in named_children(node)) + ")"
    if kind == "parameter_declaration":
        names = ", ".join(node_text(n) for n in field_nodes(node, "name"))
        type_node = node.child_by_field_name("type")
        rendered = render_node(type_node) if type_node is not None else ""
        return f"{names} {rendered}" if names else rendered
    if kind == "variadic_parameter_declaration":
        name = node.child_by_field_name("name")
        type_node = node.child_by_field_name("type")
        rendered = "..." + (render_node(type_node) if type_node is not None else "")
        return f"{node_text(name)} {rendered}" if name is not None else rendered
    if kind == "struct_type":
        fields: list[str] = []
        for child in named_children(node):
            if child.type == "field_declaration_list":
                fields.extend(render_node(f) for f in named_children(child))
        return "struct{" + "; ".join(fields) + "}"
    if kind == "field_declaration":
        names = ", ".join(node_text(n) for n in field_nodes(node, "name"))
        type_node = node.child_by_field_name("type")
        rendered = render_node(type_node) if type_node is not None else ""
        if not names and has_token(node, "*"):
            rendered = "*" + rendered
        text = f"{names} {rendered}" if names else rendered
        tag = node.child_by_field_name("tag")
        if tag is not None:
            text += " " + node_text(tag)
        return text
    if kind == "interface_type":
        elems = [render_node(c) for c in named_children(node)]
        return "interface{" + "; ".join(elems) + "}"
    if kind in ("method_elem", "method_spec"):
        name = node.child_by_field_name("name")
        return node_text(name) + render_signature(node)[len("func") :]
    if kind == "function_type":
        return render_signature(node)
    if kind in _SIGNATURE_NODES:
        return render_signature(node)
    return _collapse(node_text(node))
