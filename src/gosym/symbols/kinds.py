"""Object kinds and the kind filter mask.

``ObjectKind`` names what an identifier refers to. Four kinds are
serializable and selectable with ``-k``; ``PACKAGE`` exists only so the
resolver can describe import names, and no mask ever contains it.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum

from gosym.core.errors import ConfigError


class ObjectKind(str, Enum):
    """Kind of a declared Go entity."""

    PACKAGE = "package"
    CONST = "const"
    TYPE = "type"
    VAR = "var"
    FUNC = "func"

    @property
    def serializable(self) -> bool:
        return self in _BITS

    @classmethod
    def from_token(cls, token: str) -> ObjectKind | None:
        """Map a kind token to its kind; None for anything not serializable."""
        for kind in _BITS:
            if kind.value == token:
                return kind
        return None


_BITS: dict[ObjectKind, int] = {
    ObjectKind.CONST: 1 << 0,
    ObjectKind.TYPE: 1 << 1,
    ObjectKind.VAR: 1 << 2,
    ObjectKind.FUNC: 1 << 3,
}

SERIALIZABLE_KINDS: tuple[ObjectKind, ...] = tuple(_BITS)
DEFAULT_KINDS = ",".join(kind.value for kind in SERIALIZABLE_KINDS)


@dataclass(frozen=True, slots=True)
class KindMask:
    """Immutable bit set over the serializable object kinds."""

    bits: int = 0

    @classmethod
    def of(cls, kinds: Iterable[ObjectKind]) -> KindMask:
        bits = 0
        for kind in kinds:
            bits |= _BITS.get(kind, 0)
        return cls(bits)

    @classmethod
    def all(cls) -> KindMask:
        return cls.of(SERIALIZABLE_KINDS)

    def __contains__(self, kind: object) -> bool:
        bit = _BITS.get(kind) if isinstance(kind, ObjectKind) else None
        return bit is not None and self.bits & bit != 0

    @property
    def kinds(self) -> tuple[ObjectKind, ...]:
        return tuple(kind for kind in SERIALIZABLE_KINDS if kind in self)

    def __str__(self) -> str:
        return ",".join(kind.value for kind in self.kinds)


def parse_kinds(text: str) -> KindMask:
    """Parse a comma-separated kind list such as ``"func,var"``.

    Tokens match exactly and case-sensitively.

    Raises:
        ConfigError: On an empty list or an unknown token.
    """
    if text == "":
        raise ConfigError.invalid_value("kinds", text, "empty kind set")
    bits = 0
    for token in text.split(","):
        kind = ObjectKind.from_token(token)
        if kind is None:
            raise ConfigError.unknown_kind(token)
        bits |= _BITS[kind]
    return KindMask(bits)
