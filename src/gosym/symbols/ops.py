"""Symbol scanning: packages in, symbol lines out.

``SymbolScanner`` wires the pieces together for a run: the package cache and
importer, the type resolver, the position mapper and the per-run options.
For every file of every requested package it walks the syntax tree, resolves
each candidate expression, filters by kind, and renders a ``SymbolLine``.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import Any

import structlog

from gosym.config.constants import UNIVERSE_PACKAGE
from gosym.config.models import GosymConfig, ScanOptions
from gosym.packages.cache import PackageCache
from gosym.packages.importer import GoImporter
from gosym.packages.models import Package
from gosym.packages.module_mapping import PackageMapper
from gosym.parsing.treesitter import GoParser, SourceFile, node_text
from gosym.symbols.adapter import ResolverAdapter, SymbolOccurrence
from gosym.symbols.kinds import ObjectKind
from gosym.symbols.line import SymbolLine
from gosym.symbols.visitor import ExprForm, Walk, selector_parts, walk_file
from gosym.types.resolver import TypeResolver

logger = structlog.get_logger()


class SymbolScanner:
    """Emits symbol lines for Go packages.

    Usage::

        scanner = SymbolScanner(load_config(), ScanOptions(print_type=True))
        for line in scanner.scan(["example.com/foo"]):
            print(line)

    The scanner owns one package cache for its lifetime; scanning several
    packages that import each other parses each package once.
    """

    def __init__(
        self,
        config: GosymConfig,
        options: ScanOptions | None = None,
        *,
        parser: GoParser | None = None,
    ) -> None:
        self.options = options or ScanOptions()
        self.importer = GoImporter(config.search, parser)
        self.cache = PackageCache(self.importer.load)
        self.mapper = PackageMapper(config.search.roots)
        self.resolver = TypeResolver(self.cache.get)

    def scan(self, paths: Iterable[str]) -> Iterator[SymbolLine]:
        """Lines for every package path, in argument then file order."""
        for path in paths:
            package = self.resolver.load(path)
            if package is None:
                continue
            yield from self.scan_package(package)

    def scan_package(self, package: Package) -> Iterator[SymbolLine]:
        self.resolver.bind(package)
        for file in package.files:
            yield from self.scan_file(file)

    def scan_file(self, file: SourceFile) -> list[SymbolLine]:
        """Lines of one file.

        A dot import ends the file early; lines found before it are kept.
        """
        adapter = ResolverAdapter(self.resolver, file, self.options)
        lines: list[SymbolLine] = []

        def visit(node: Any, form: ExprForm) -> Walk:
            occurrence = adapter.resolve(node, form)
            if occurrence is not None:
                line = self.build_line(occurrence, file)
                if line is not None:
                    lines.append(line)
            return Walk.CONTINUE

        result = walk_file(file, visit, lambda decl: self.resolver.declare_init(decl, file))
        logger.debug("file.scanned", file=file.path, lines=len(lines), stopped=result is Walk.STOP_FILE)
        return lines

    def wants(self, occurrence: SymbolOccurrence) -> bool:
        """Kind mask and universe filter."""
        if occurrence.obj.kind not in self.options.kinds:
            return False
        return self.options.include_all or not occurrence.universe

    def build_line(self, occurrence: SymbolOccurrence, file: SourceFile) -> SymbolLine | None:
        """Render an occurrence, or None if it is filtered out."""
        if not self.wants(occurrence):
            return None
        expr = self._expr_text(occurrence, file)
        if expr is None:
            return None
        if occurrence.universe:
            refer_package = UNIVERSE_PACKAGE
        else:
            assert occurrence.refer_pos is not None
            refer_package = self.mapper.owner_of(occurrence.refer_pos)
        type_text = ""
        if self.options.print_type and occurrence.type is not None:
            type_text = occurrence.type.render()
        return SymbolLine(
            pos=occurrence.pos,
            expr_package=self.mapper.owner_of(occurrence.pos),
            refer_package=refer_package,
            local=occurrence.local,
            expr=expr,
            kind=occurrence.obj.kind,
            definition=occurrence.definition,
            type_text=type_text,
        )

    def _expr_text(self, occurrence: SymbolOccurrence, file: SourceFile) -> str | None:
        if occurrence.form is ExprForm.IDENTIFIER:
            return node_text(occurrence.node)
        base, selected = selector_parts(occurrence.node)
        name = node_text(selected) if selected is not None else occurrence.obj.name
        base_type = self.resolver.type_of(base, file) if base is not None else None
        if base_type is None:
            if self.options.verbose:
                logger.info(
                    "no type for selector base",
                    pos=str(occurrence.pos),
                    base=node_text(base) if base is not None else "",
                )
            return None
        if base_type.kind is ObjectKind.PACKAGE:
            return name
        return f"{base_type.depointer().render()}.{name}"
