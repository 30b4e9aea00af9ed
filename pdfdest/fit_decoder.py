"""Decoding of destination arrays into navigation targets."""

import logging
from collections.abc import Sequence
from dataclasses import replace

from pdfdest.collaborators import PageIndex
from pdfdest.dest_value import dest_value
from pdfdest.fit_type import FitKind, FitType, UnknownFitType, parse_fit_type
from pdfdest.navigation_target import NavigationTarget
from pdfdest.pdf_values import (
    DEFAULT_NULL_TOKENS,
    Name,
    Reference,
    StringLiteral,
    as_number,
    is_null_literal,
)

logger = logging.getLogger(__name__)

# First operand slot after [page, /Type]
OPERAND_OFFSET = 2


def decode_destination_array(
    arr: Sequence[object],
    pages: PageIndex | None = None,
    null_tokens: frozenset[str] = DEFAULT_NULL_TOKENS,
) -> NavigationTarget:
    """Decode ``[page /Type operands...]`` into a NavigationTarget.

    Malformed arrays never fail: short arrays leave trailing fields absent,
    and a literal of the wrong kind only blanks its own slot.
    """
    page_ref = _decode_page(dest_value(0, arr), pages)
    fit_type = _decode_fit_type(arr)

    fields: dict[str, float | None] = {}
    match fit_type:
        case FitType.XYZ:
            fields["left"] = _number_at(arr, 2, null_tokens)
            fields["top"] = _number_at(arr, 3, null_tokens)
            # zero and null both mean "leave the zoom alone"
            zoom = _number_at(arr, 4, null_tokens)
            fields["zoom"] = zoom if zoom else None
        case FitType.FITH | FitType.FITBH:
            fields["top"] = _number_at(arr, 2, null_tokens)
        case FitType.FITV | FitType.FITBV:
            fields["left"] = _number_at(arr, 2, null_tokens)
        case FitType.FITR:
            fields["left"] = _number_at(arr, 2, null_tokens)
            fields["bottom"] = _number_at(arr, 3, null_tokens)
            fields["right"] = _number_at(arr, 4, null_tokens)
            fields["top"] = _number_at(arr, 5, null_tokens)
        case FitType.FIT | FitType.FITB | None:
            pass
        case _:
            logger.debug("Passing through unrecognized fit type %r", fit_type.token)

    return NavigationTarget(page_ref=page_ref, fit_type=fit_type, **fields)


def _decode_page(value: object, pages: PageIndex | None) -> Reference | None:
    """Slot 0: a page reference, or a zero-based page index."""
    if isinstance(value, Reference):
        return value
    if isinstance(value, int) and not isinstance(value, bool):
        if pages is None:
            logger.debug("Page index %d given but no page table is available", value)
            return None
        if 0 <= value < pages.count():
            return pages.page_ref_at(value)
        logger.info("Page index %d is out of range (%d pages)", value, pages.count())
        return None
    if value is not None:
        logger.debug("Ignoring non-page value %r in page slot", value)
    return None


def _decode_fit_type(arr: Sequence[object]) -> FitKind | None:
    value = dest_value(1, arr)
    if value is None:
        return None
    token = value.value if isinstance(value, StringLiteral) else str(value)
    fit_type = parse_fit_type(token, tuple(arr[OPERAND_OFFSET:]))
    if isinstance(fit_type, UnknownFitType) and not isinstance(value, Name):
        return replace(fit_type, literal=value)
    return fit_type


def _number_at(
    arr: Sequence[object], index: int, null_tokens: frozenset[str]
) -> float | None:
    value = dest_value(index, arr)
    if is_null_literal(value, null_tokens):
        return None
    number = as_number(value)
    if number is None:
        logger.debug("Non-numeric literal %r at slot %d left unset", value, index)
    return number
