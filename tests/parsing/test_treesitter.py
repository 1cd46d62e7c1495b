"""Tests for tree-sitter parsing of Go files."""

from pathlib import Path
from typing import Any

import pytest

from gosym.core.errors import InvariantError
from gosym.parsing.treesitter import (
    NO_POSITION,
    GoParser,
    Position,
    has_token,
    literal_to_string,
    node_text,
    same_node,
)

SOURCE = b"""package foo

import (
\t"fmt"
\tb "some/bar"
\t. "strings"
\t_ "embed"
)

var greeting = "hi\\tthere"
var raw = `a\\n`

func Run() {
\tx := 1
\tfmt.Println(b.Baz(), x, greeting, raw)
}
"""


def _find(node: Any, node_type: str) -> Any:
    if node.type == node_type:
        return node
    for child in node.children:
        found = _find(child, node_type)
        if found is not None:
            return found
    return None


@pytest.fixture(scope="module")
def parser() -> GoParser:
    return GoParser()


class TestPosition:
    """Position rendering and validity."""

    def test_str_is_file_line_col(self) -> None:
        assert str(Position("a/b.go", 3, 7)) == "a/b.go:3:7"

    @pytest.mark.parametrize(
        ("position", "valid"),
        [
            (Position("a.go", 1, 1), True),
            (Position("", 1, 1), False),
            (Position("a.go", 0, 0), False),
            (NO_POSITION, False),
        ],
    )
    def test_is_valid(self, position: Position, valid: bool) -> None:
        assert position.is_valid is valid


class TestGoParser:
    """GoParser.parse tests."""

    def test_given_file_when_parsed_then_package_name_read(self, parser: GoParser) -> None:
        source = parser.parse("foo.go", SOURCE)

        assert source.package_name == "foo"
        assert source.error_count == 0

    def test_given_import_block_when_parsed_then_names_and_paths_collected(
        self, parser: GoParser
    ) -> None:
        source = parser.parse("foo.go", SOURCE)

        assert [(spec.path, spec.name) for spec in source.imports] == [
            ("fmt", None),
            ("some/bar", "b"),
            ("strings", "."),
            ("embed", "_"),
        ]
        assert source.imports[2].is_dot
        assert source.imports[3].is_blank

    def test_given_path_when_parsed_without_content_then_reads_file(
        self, parser: GoParser, tmp_path: Path
    ) -> None:
        path = tmp_path / "foo.go"
        path.write_bytes(SOURCE)

        source = parser.parse(path)

        assert source.path == str(path)
        assert source.content == SOURCE

    def test_given_declarations_then_package_clause_excluded(self, parser: GoParser) -> None:
        source = parser.parse("foo.go", SOURCE)

        types = [decl.type for decl in source.declarations()]

        assert types == [
            "import_declaration",
            "var_declaration",
            "var_declaration",
            "function_declaration",
        ]

    def test_given_node_when_position_then_one_based(self, parser: GoParser) -> None:
        source = parser.parse("foo.go", SOURCE)
        func = _find(source.root, "function_declaration")

        name = func.child_by_field_name("name")

        assert source.position(name) == Position("foo.go", 13, 6)

    def test_given_broken_source_then_errors_counted(self, parser: GoParser) -> None:
        source = parser.parse("bad.go", b"package bad\n\nfunc (\n")

        assert source.error_count > 0
        assert source.package_name == "bad"


class TestNodeHelpers:
    """Small node helper tests."""

    def test_short_var_declaration_has_define_token(self, parser: GoParser) -> None:
        source = parser.parse("foo.go", SOURCE)
        stmt = _find(source.root, "short_var_declaration")

        assert has_token(stmt, ":=")
        assert not has_token(stmt, "=")

    def test_same_node_compares_span_and_type(self, parser: GoParser) -> None:
        source = parser.parse("foo.go", SOURCE)
        first = _find(source.root, "function_declaration")
        again = _find(source.root, "function_declaration")

        assert same_node(first, again)
        assert not same_node(first, None)
        assert not same_node(first, first.child_by_field_name("name"))


class TestLiteralToString:
    """literal_to_string tests."""

    def test_interpreted_literal_unquoted(self, parser: GoParser) -> None:
        source = parser.parse("foo.go", SOURCE)
        literal = _find(source.root, "var_declaration")
        node = _find(literal, "interpreted_string_literal")

        assert literal_to_string(node) == "hi\tthere"

    def test_raw_literal_kept_verbatim(self, parser: GoParser) -> None:
        source = parser.parse("foo.go", SOURCE)
        node = _find(source.root, "raw_string_literal")

        assert literal_to_string(node) == "a\\n"

    def test_non_string_node_raises(self, parser: GoParser) -> None:
        source = parser.parse("foo.go", SOURCE)
        node = _find(source.root, "int_literal")

        with pytest.raises(InvariantError) as exc_info:
            literal_to_string(node)

        assert exc_info.value.message == "expected string"
        assert node_text(node) == "1"
