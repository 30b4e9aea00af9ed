"""Bounds-safe positional access into destination arrays."""

from collections.abc import Sequence


def dest_value(index: int, params: Sequence[object]) -> object:
    """Return ``params[index]``, or None when the array is too short."""
    if 0 <= index < len(params):
        return params[index]
    return None
