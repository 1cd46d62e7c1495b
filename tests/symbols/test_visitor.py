"""Tests for the traversal producing candidate expressions."""

from typing import Any

import pytest
from structlog.testing import capture_logs

from gosym.parsing.treesitter import GoParser, node_text
from gosym.symbols.visitor import ExprForm, Walk, is_init_function, walk_file


@pytest.fixture(scope="module")
def parser() -> GoParser:
    return GoParser()


def _collect(parser: GoParser, source: str, declare_init: Any = None) -> tuple[list[tuple[str, ExprForm]], Walk]:
    file = parser.parse("/src/p/p.go", source.encode())
    seen: list[tuple[str, ExprForm]] = []

    def visit(node: Any, form: ExprForm) -> Walk:
        seen.append((node_text(node), form))
        return Walk.CONTINUE

    result = walk_file(file, visit, declare_init)
    return seen, result


class TestTraversal:
    """Order and coverage of visited expressions."""

    def test_given_selector_then_base_visited_before_selector(self, parser: GoParser) -> None:
        seen, result = _collect(parser, "package p\n\nfunc F() {\n\tfmt.Println(x)\n}\n")

        assert result is Walk.CONTINUE
        assert seen == [
            ("F", ExprForm.IDENTIFIER),
            ("fmt", ExprForm.IDENTIFIER),
            ("fmt.Println", ExprForm.SELECTOR),
            ("x", ExprForm.IDENTIFIER),
        ]

    def test_given_chained_selector_then_each_level_visited(self, parser: GoParser) -> None:
        seen, _ = _collect(parser, "package p\n\nvar v = a.b.c\n")

        assert seen == [
            ("v", ExprForm.IDENTIFIER),
            ("a", ExprForm.IDENTIFIER),
            ("a.b", ExprForm.SELECTOR),
            ("a.b.c", ExprForm.SELECTOR),
        ]

    def test_given_keyed_literal_then_keys_skipped(self, parser: GoParser) -> None:
        seen, _ = _collect(parser, "package p\n\nvar v = T{Name: n}\n")

        assert ("Name", ExprForm.IDENTIFIER) not in seen
        assert ("n", ExprForm.IDENTIFIER) in seen
        assert ("T", ExprForm.IDENTIFIER) in seen

    def test_given_qualified_type_then_selector_form(self, parser: GoParser) -> None:
        seen, _ = _collect(parser, 'package p\n\nimport "io"\n\nvar r io.Reader\n')

        assert seen == [
            ("r", ExprForm.IDENTIFIER),
            ("io", ExprForm.IDENTIFIER),
            ("io.Reader", ExprForm.SELECTOR),
        ]

    def test_literals_blank_and_labels_skipped(self, parser: GoParser) -> None:
        source = 'package p\n\nfunc F() {\nloop:\n\tfor {\n\t\tbreak loop\n\t}\n\tprintln("s", 1)\n}\n'

        seen, _ = _collect(parser, source)

        assert seen == [("F", ExprForm.IDENTIFIER), ("println", ExprForm.IDENTIFIER)]


class TestDotImport:
    """A dot import stops the walk of its file."""

    def test_given_dot_import_then_walk_stops(self, parser: GoParser) -> None:
        seen, result = _collect(
            parser, 'package p\n\nimport (\n\t"fmt"\n\t. "strings"\n)\n\nvar after = fmt.Sprint()\n'
        )

        assert result is Walk.STOP_FILE
        assert seen == []

    def test_given_dot_import_then_warning_logged(self, parser: GoParser) -> None:
        with capture_logs() as logs:
            _collect(parser, 'package p\n\nimport . "strings"\n')

        assert logs[0]["event"] == "import to . not supported"
        assert logs[0]["log_level"] == "warning"
        assert logs[0]["line"] == 3

    def test_given_visit_returns_stop_then_walk_stops(self, parser: GoParser) -> None:
        file = parser.parse("/src/p/p.go", b"package p\n\nvar a, b = c, d\n")
        seen: list[str] = []

        def visit(node: Any, form: ExprForm) -> Walk:
            seen.append(node_text(node))
            return Walk.STOP_FILE if node_text(node) == "b" else Walk.CONTINUE

        assert walk_file(file, visit) is Walk.STOP_FILE
        assert seen == ["a", "b"]


class TestInitFunctions:
    """init declarations are announced before their names are visited."""

    def test_given_init_then_declared_before_visit(self, parser: GoParser) -> None:
        events: list[str] = []

        def declare_init(decl: Any) -> None:
            events.append("declare:" + node_text(decl.child_by_field_name("name")))

        file = parser.parse("/src/p/p.go", b"package p\n\nfunc init() {}\n")

        def visit(node: Any, form: ExprForm) -> Walk:
            events.append("visit:" + node_text(node))
            return Walk.CONTINUE

        walk_file(file, visit, declare_init)

        assert events == ["declare:init", "visit:init"]

    @pytest.mark.parametrize(
        ("source", "expected"),
        [
            ("package p\n\nfunc init() {}\n", True),
            ("package p\n\nfunc init(x int) {}\n", False),
            ("package p\n\nfunc (T) init() {}\n", False),
            ("package p\n\nfunc setup() {}\n", False),
        ],
    )
    def test_is_init_function(self, parser: GoParser, source: str, expected: bool) -> None:
        file = parser.parse("/src/p/p.go", source.encode())

        assert is_init_function(file.declarations()[0]) is expected

