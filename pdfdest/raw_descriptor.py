"""The shapes a raw destination descriptor can arrive in."""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from pdfdest.navigation_target import NavigationTarget
from pdfdest.pdf_values import Name, Reference, StringLiteral

DEST_KEY = "D"


@dataclass(frozen=True)
class IndirectRef:
    ref: Reference


@dataclass(frozen=True)
class ActionLike:
    """A dictionary (go-to action or name-tree entry) holding the array under ``D``."""

    mapping: Mapping[str, Any]

    @property
    def nested(self) -> Any:
        return self.mapping.get(DEST_KEY)


@dataclass(frozen=True)
class AlreadyResolved:
    target: NavigationTarget


@dataclass(frozen=True)
class ArrayForm:
    items: tuple[Any, ...]


@dataclass(frozen=True)
class Named:
    """A named destination token: a Name, a string or a string literal."""

    token: Name | StringLiteral | str


RawDescriptor = IndirectRef | ActionLike | AlreadyResolved | ArrayForm | Named


def classify_descriptor(value: Any) -> RawDescriptor | None:
    """Wrap a raw descriptor value in its variant, or None if unrecognized."""
    if isinstance(value, RawDescriptor):
        return value
    if isinstance(value, Reference):
        return IndirectRef(value)
    if isinstance(value, Mapping):
        return ActionLike(value)
    if isinstance(value, NavigationTarget):
        return AlreadyResolved(value)
    if isinstance(value, (list, tuple)):
        return ArrayForm(tuple(value))
    if isinstance(value, (str, StringLiteral)):
        return Named(value)
    # Destination nodes expose their resolved target
    target = getattr(value, "target", None)
    if isinstance(target, NavigationTarget):
        return AlreadyResolved(target)
    return None
