"""Go source parsing (tree-sitter) and single-line pretty printing."""

from gosym.parsing.printer import render_node, render_signature
from gosym.parsing.treesitter import (
    NO_POSITION,
    GoParser,
    ImportSpec,
    Position,
    SourceFile,
    literal_to_string,
    node_text,
)

__all__ = [
    "GoParser",
    "ImportSpec",
    "NO_POSITION",
    "Position",
    "SourceFile",
    "literal_to_string",
    "node_text",
    "render_node",
    "render_signature",
]
