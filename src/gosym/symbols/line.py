"""Symbol line model and its one-line text encoding.

Each emitted occurrence is one line::

    <file>:<line>:<col>: <ownerPkg> <referPkg> [local]<expr><kind>[+][ <type>]

``<kind>`` follows ``<expr>`` with no separator (``Bazfunc``), ``local``
marks a function-local referenced object, ``+`` marks an occurrence that is
its own declaration, and the optional type text runs to the end of the line.

``parse_line`` is a small tokenizer over exactly this grammar, so a line
written by ``format_line`` parses back to an equal ``SymbolLine``.
"""

from __future__ import annotations

from dataclasses import dataclass

from gosym.config.constants import DEFINITION_MARKER, LOCAL_MARKER
from gosym.core.errors import LineParseError
from gosym.parsing.treesitter import Position
from gosym.symbols.kinds import SERIALIZABLE_KINDS, ObjectKind

_DIGITS = frozenset("0123456789")


@dataclass(frozen=True, slots=True)
class SymbolLine:
    """One serialized symbol occurrence."""

    pos: Position
    expr_package: str  # import path containing the occurrence
    refer_package: str  # import path of the referenced declaration, or "universe"
    local: bool
    expr: str
    kind: ObjectKind
    definition: bool
    type_text: str = ""

    def __str__(self) -> str:
        return format_line(self)


def format_line(line: SymbolLine) -> str:
    local = LOCAL_MARKER if line.local else ""
    definition = DEFINITION_MARKER if line.definition else ""
    text = (
        f"{line.pos}: {line.expr_package} {line.refer_package} "
        f"{local}{line.expr}{line.kind.value}{definition}"
    )
    if line.type_text:
        text += " " + line.type_text
    return text


def parse_line(raw: str) -> SymbolLine:
    """Parse one serialized line.

    A trailing newline is ignored.

    Raises:
        LineParseError: If the line does not match the grammar, or its kind
            token is not one of const, type, var or func.
    """
    text = raw.rstrip("\r\n")
    pos, rest = _split_position(raw, text)
    fields = rest.split(None, 3)
    if len(fields) < 3:
        raise LineParseError.invalid_line(raw)
    expr_package, refer_package, symbol = fields[:3]
    type_text = fields[3] if len(fields) == 4 else ""
    local, expr, kind, definition = _split_symbol(raw, symbol)
    return SymbolLine(
        pos=pos,
        expr_package=expr_package,
        refer_package=refer_package,
        local=local,
        expr=expr,
        kind=kind,
        definition=definition,
        type_text=type_text,
    )


def _is_decimal(text: str) -> bool:
    return bool(text) and all(c in _DIGITS for c in text)


def _split_position(raw: str, text: str) -> tuple[Position, str]:
    """Split ``file:line:col:`` off the front; the remainder starts with whitespace."""
    filename, sep, rest = text.partition(":")
    if not filename or not sep:
        raise LineParseError.invalid_line(raw)
    line_text, sep, rest = rest.partition(":")
    if not sep:
        raise LineParseError.invalid_line(raw)
    column_text, sep, rest = rest.partition(":")
    if not sep or not _is_decimal(line_text) or not _is_decimal(column_text):
        raise LineParseError.invalid_line(raw)
    if not rest[:1].isspace():
        raise LineParseError.invalid_line(raw)
    return Position(filename, int(line_text), int(column_text)), rest


def _split_symbol(raw: str, symbol: str) -> tuple[bool, str, ObjectKind, bool]:
    """Split ``[local]<expr><kind>[+]`` into its parts.

    ``local`` is taken as a marker whenever the token starts with it and an
    expression remains after it.
    """
    definition = symbol.endswith(DEFINITION_MARKER)
    if definition:
        symbol = symbol[: -len(DEFINITION_MARKER)]
    local = False
    for kind in SERIALIZABLE_KINDS:
        if symbol.endswith(kind.value):
            body = symbol[: -len(kind.value)]
            break
    else:
        raise LineParseError.invalid_kind(raw, symbol)
    if body.startswith(LOCAL_MARKER) and len(body) > len(LOCAL_MARKER):
        local = True
        body = body[len(LOCAL_MARKER) :]
    if not body or DEFINITION_MARKER in body:
        raise LineParseError.invalid_line(raw)
    return local, body, kind, definition
