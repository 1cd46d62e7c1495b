"""The universe scope: Go's predeclared identifiers.

Predeclared types and functions are declared by parsing a Go rendition of
the toolchain's ``builtin`` package documentation file, so they get real
signatures (``len`` returns ``int``, ``error`` has an ``Error`` method).
The names that file only uses as documentation placeholders are removed.
``true``, ``false``, ``iota``, ``nil``, ``new`` and ``make`` are keywords to
the tree-sitter grammar and are declared directly.
"""

from __future__ import annotations

import functools
from pathlib import Path

from gosym.config.constants import UNIVERSE_PACKAGE
from gosym.packages.models import Package
from gosym.parsing.treesitter import GoParser
from gosym.symbols.kinds import ObjectKind
from gosym.types.declare import declare_package
from gosym.types.objects import Declaration, DeclForm, Object, Type

UNIVERSE_FILENAME = "<universe>"

BUILTIN_SOURCE = """\
package builtin

type bool bool
type string string
type int int
type int8 int8
type int16 int16
type int32 int32
type int64 int64
type uint uint
type uint8 uint8
type uint16 uint16
type uint32 uint32
type uint64 uint64
type uintptr uintptr
type float32 float32
type float64 float64
type complex64 complex64
type complex128 complex128
type byte = uint8
type rune = int32
type any = interface{}

type error interface {
	Error() string
}

type comparable interface{ comparable }

func append(slice []Type, elems ...Type) []Type
func copy(dst, src []Type) int
func delete(m map[Type]Type1, key Type)
func len(v Type) int
func cap(v Type) int
func max(x Type, y ...Type) Type
func min(x Type, y ...Type) Type
func complex(r, i FloatType) ComplexType
func real(c ComplexType) FloatType
func imag(c ComplexType) FloatType
func clear(t Type)
func close(c chan<- Type)
func panic(v any)
func recover() any
func print(args ...Type)
func println(args ...Type)

type Type int
type Type1 int
type FloatType float64
type ComplexType complex128
"""

_PLACEHOLDERS = ("Type", "Type1", "FloatType", "ComplexType")

_KEYWORD_OBJECTS: tuple[tuple[str, ObjectKind, str | None], ...] = (
    ("true", ObjectKind.CONST, "bool"),
    ("false", ObjectKind.CONST, "bool"),
    ("iota", ObjectKind.CONST, "int"),
    ("nil", ObjectKind.VAR, None),
    ("new", ObjectKind.FUNC, None),
    ("make", ObjectKind.FUNC, None),
)


class Universe:
    """The outermost scope, shared by every package."""

    def __init__(self) -> None:
        source = GoParser().parse(UNIVERSE_FILENAME, BUILTIN_SOURCE.encode())
        self.file = source
        self.package = Package(
            import_path=UNIVERSE_PACKAGE,
            name=UNIVERSE_PACKAGE,
            directory=Path(),
            files=[source],
        )
        declare_package(self.package)
        for name in _PLACEHOLDERS:
            self.package.scope.pop(name, None)
        self._value_types: dict[str, Type] = {}
        for name, kind, type_name in _KEYWORD_OBJECTS:
            obj = Object(
                name=name,
                kind=kind,
                decl=Declaration(DeclForm.PREDECLARED, source, source.root),
                package=self.package,
            )
            self.package.scope[name] = obj
            if type_name is not None:
                self._value_types[name] = self.type_named(type_name).with_kind(kind)

    def lookup(self, name: str) -> Object | None:
        return self.package.lookup(name)

    def contains(self, obj: Object) -> bool:
        """Whether ``obj`` is the predeclared object of its name."""
        return self.lookup(obj.name) is obj

    def declares(self, obj: Object) -> bool:
        """Whether ``obj`` was declared by the predeclared source (e.g. ``error.Error``)."""
        return obj.decl is not None and obj.decl.file is self.file

    def type_named(self, name: str) -> Type:
        """Value type whose expression is the predeclared type ``name``."""
        obj = self.package.scope[name]
        assert obj.decl is not None
        return Type(ObjectKind.VAR, obj.decl.node.child_by_field_name("name"), self.file)

    def keyword_type(self, name: str) -> Type | None:
        """Type of ``true``, ``false`` or ``iota``; None for ``nil``."""
        return self._value_types.get(name)


@functools.cache
def get_universe() -> Universe:
    return Universe()
