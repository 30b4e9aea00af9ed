"""Encoding of navigation targets back into destination arrays."""

from pdfdest.fit_type import FitKind, FitType, UnknownFitType, fit_fields
from pdfdest.navigation_target import NavigationTarget
from pdfdest.pdf_values import Name, Reference


def encode_navigation_target(target: NavigationTarget) -> list[object]:
    """Build the canonical ``[page /Type operands...]`` array for a target.

    Only operands meaningful for the fit type are written. Trailing absent
    operands are dropped; an absent operand followed by a present one is
    written as null so later positions stay put.
    """
    if target.fit_type is None:
        return [target.page_ref]

    if isinstance(target.fit_type, UnknownFitType):
        return destination_syntax(
            target.page_ref, target.fit_type, *target.fit_type.operands
        )

    operands = [getattr(target, f) for f in fit_fields(target.fit_type)]
    while operands and operands[-1] is None:
        operands.pop()
    return destination_syntax(target.page_ref, target.fit_type, *operands)


def destination_syntax(
    page_ref: Reference | None, fit_type: FitKind, *operands: object
) -> list[object]:
    """Assemble a raw destination array from its parts."""
    if isinstance(fit_type, UnknownFitType) and fit_type.literal is not None:
        return [page_ref, fit_type.literal, *operands]
    return [page_ref, Name(fit_type.token), *operands]


def xyz_syntax(
    page_ref: Reference | None,
    left: float | None,
    top: float | None,
    zoom: float | None = None,
) -> list[object]:
    """Assemble ``[page /XYZ left top zoom]``; a zero zoom is written as null."""
    return destination_syntax(page_ref, FitType.XYZ, left, top, zoom or None)
