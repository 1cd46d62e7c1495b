"""Loaded package model."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from gosym.parsing.treesitter import SourceFile, node_key
from gosym.types.objects import Object

ObjectKey = tuple[str, int, int, str]


def object_key(file: SourceFile, node: Any) -> ObjectKey:
    """Registry key of the object declared by ``node`` in ``file``."""
    return (file.path, *node_key(node))


@dataclass
class Package:
    """A parsed Go package with its package-level scope.

    ``scope`` holds package-block names (constants, types, variables and
    functions other than ``init``). Methods are not in the package block;
    they live in ``methods`` keyed by receiver base type name. ``objects``
    maps every package-level declaring name node to its object.
    """

    import_path: str
    name: str
    directory: Path
    files: list[SourceFile] = field(default_factory=list)
    scope: dict[str, Object] = field(default_factory=dict)
    methods: dict[str, dict[str, Object]] = field(default_factory=dict)
    objects: dict[ObjectKey, Object] = field(default_factory=dict, repr=False)

    def lookup(self, name: str) -> Object | None:
        return self.scope.get(name)

    def method(self, type_name: str, name: str) -> Object | None:
        return self.methods.get(type_name, {}).get(name)

    def object_at(self, file: SourceFile, node: Any) -> Object | None:
        return self.objects.get(object_key(file, node))
