"""Boundary between the traversal and the type resolver."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import structlog

from gosym.config.models import ScanOptions
from gosym.parsing.treesitter import Position, SourceFile, node_text
from gosym.symbols.visitor import ExprForm, selector_parts
from gosym.types.objects import Object, Type
from gosym.types.resolver import TypeResolver

logger = structlog.get_logger()


@dataclass(frozen=True)
class SymbolOccurrence:
    """One resolved identifier or selector.

    ``pos`` is the occurrence (the selected name for selectors). ``refer_pos``
    is the referenced declaration and is None exactly for universe objects.
    """

    pos: Position
    node: Any
    form: ExprForm
    obj: Object
    type: Type | None
    refer_pos: Position | None
    local: bool = False
    universe: bool = False

    @property
    def definition(self) -> bool:
        return self.refer_pos == self.pos


class ResolverAdapter:
    """Resolves candidate expressions of one file into occurrences."""

    def __init__(self, resolver: TypeResolver, file: SourceFile, options: ScanOptions) -> None:
        self.resolver = resolver
        self.file = file
        self.options = options

    def occurrence_position(self, node: Any, form: ExprForm) -> Position:
        if form is ExprForm.SELECTOR:
            _, selected = selector_parts(node)
            if selected is not None:
                return self.file.position(selected)
        return self.file.position(node)

    def resolve(self, node: Any, form: ExprForm) -> SymbolOccurrence | None:
        """Resolve ``node``; None (never an error) when it cannot be resolved."""
        obj, typ = self.resolver.expr_type(node, self.file)
        if obj is None:
            if self.options.verbose:
                logger.info(
                    "no object for expression",
                    pos=str(self.file.position(node)),
                    expr=node_text(node),
                )
            return None
        universe = self.resolver.universe.contains(obj) or self.resolver.universe.declares(obj)
        refer_pos = None if universe else obj.pos
        if not universe and (refer_pos is None or not refer_pos.is_valid):
            if self.options.verbose:
                logger.info("no declaration position", pos=str(self.file.position(node)), name=obj.name)
            return None
        return SymbolOccurrence(
            pos=self.occurrence_position(node, form),
            node=node,
            form=form,
            obj=obj,
            type=typ,
            refer_pos=refer_pos,
            universe=universe,
        )
