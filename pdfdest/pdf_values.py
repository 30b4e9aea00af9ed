"""Data models for the literal values found in destination descriptors."""

import math
from dataclasses import dataclass

DEFAULT_NULL_TOKENS = frozenset({"null"})


@dataclass(frozen=True)
class Reference:
    """Indirect object identity, written ``12 0 R`` in a document."""

    number: int
    generation: int = 0

    def __str__(self) -> str:
        return f"{self.number} {self.generation} R"


class Name(str):
    """A ``/Name`` token. Compares equal to its bare text."""

    __slots__ = ()

    def __repr__(self) -> str:
        return f"Name({str.__repr__(self)})"


@dataclass(frozen=True)
class StringLiteral:
    """A ``(string)`` token, possibly still encrypted."""

    value: str
    encrypted: bool = False


def is_null_literal(
    value: object, null_tokens: frozenset[str] = DEFAULT_NULL_TOKENS
) -> bool:
    """Return True for the literals that mean "unspecified"."""
    if value is None:
        return True
    return isinstance(value, str) and value in null_tokens


def as_number(value: object) -> float | None:
    """Convert a finite numeric literal to float, or None otherwise."""
    # bool is an int subclass but never a coordinate
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)) and math.isfinite(value):
        return float(value)
    return None
