"""Tests for encoding navigation targets into destination arrays."""

import itertools

import pytest

from pdfdest.fit_decoder import decode_destination_array
from pdfdest.fit_encoder import destination_syntax, encode_navigation_target, xyz_syntax
from pdfdest.fit_type import FIT_TYPE_FIELDS, FitType, UnknownFitType
from pdfdest.navigation_target import NavigationTarget
from pdfdest.pdf_values import Name, Reference, StringLiteral

PAGE = Reference(7)


def _targets_for(fit_type: FitType) -> list[NavigationTarget]:
    """Every present/absent combination of the fields a fit type uses."""
    fields = FIT_TYPE_FIELDS[fit_type]
    values = {"left": 10.0, "top": 700.0, "right": 300.0, "bottom": 0.0, "zoom": 1.5}
    targets = []
    for mask in itertools.product([True, False], repeat=len(fields)):
        present = {f: values[f] for f, keep in zip(fields, mask) if keep}
        targets.append(NavigationTarget(page_ref=PAGE, fit_type=fit_type, **present))
    return targets


@pytest.mark.parametrize("fit_type", list(FitType))
def test_round_trip(fit_type: FitType) -> None:
    """Verify that decode(encode(target)) preserves every field, including absence."""
    for target in _targets_for(fit_type):
        assert decode_destination_array(encode_navigation_target(target)) == target


def test_trailing_absent_fields_omitted() -> None:
    """Verify that trailing absent operands are not written."""
    target = NavigationTarget(page_ref=PAGE, fit_type=FitType.XYZ, left=5.0)
    assert encode_navigation_target(target) == [PAGE, Name("XYZ"), 5.0]


def test_inner_absent_field_written_as_null() -> None:
    """Verify that an absent operand before a present one keeps its position."""
    target = NavigationTarget(page_ref=PAGE, fit_type=FitType.XYZ, zoom=2.0)
    assert encode_navigation_target(target) == [PAGE, Name("XYZ"), None, None, 2.0]


def test_irrelevant_fields_never_emitted() -> None:
    """Verify that fields outside the fit type's layout are dropped."""
    target = NavigationTarget(
        page_ref=PAGE, fit_type=FitType.FITH, top=100.0, left=1.0, right=2.0
    )
    assert encode_navigation_target(target) == [PAGE, Name("FitH"), 100.0]


def test_fitr_order() -> None:
    """Verify that FitR is written as left, bottom, right, top."""
    target = NavigationTarget(
        page_ref=PAGE, fit_type=FitType.FITR, left=1.0, bottom=2.0, right=3.0, top=4.0
    )
    assert encode_navigation_target(target) == [PAGE, Name("FitR"), 1.0, 2.0, 3.0, 4.0]


def test_unresolved_targets_encode() -> None:
    """Verify that unresolved targets still encode without failing."""
    assert encode_navigation_target(NavigationTarget()) == [None]
    named = NavigationTarget(named_destination="Intro")
    assert encode_navigation_target(named) == [None]
    no_page = NavigationTarget(fit_type=FitType.FIT)
    assert encode_navigation_target(no_page) == [None, Name("Fit")]


def test_unknown_fit_type_round_trip() -> None:
    """Verify that vendor fit types re-encode losslessly."""
    raw = [PAGE, Name("FitVendor"), 1, Name("x"), None]
    target = decode_destination_array(raw)
    assert target.fit_type == UnknownFitType("FitVendor", (1, Name("x"), None))
    assert encode_navigation_target(target) == raw


def test_non_name_fit_token_round_trip() -> None:
    """Verify that a fit slot holding a number or string is written back as-is."""
    for raw in (
        [PAGE, 5, 1],
        [PAGE, StringLiteral("Vendor"), 2, 3],
    ):
        target = decode_destination_array(raw)
        assert isinstance(target.fit_type, UnknownFitType)
        encoded = encode_navigation_target(target)
        assert encoded == raw
        assert type(encoded[1]) is type(raw[1])


def test_string_fit_token_matches_known_type() -> None:
    """Verify that a string literal in the fit slot is read by its text."""
    target = decode_destination_array([PAGE, StringLiteral("XYZ"), 1, 2, 3])
    assert target.fit_type is FitType.XYZ
    assert (target.left, target.top, target.zoom) == (1.0, 2.0, 3.0)
    assert encode_navigation_target(target) == [PAGE, Name("XYZ"), 1.0, 2.0, 3.0]


def test_destination_syntax_helpers() -> None:
    """Verify the raw array builders."""
    assert destination_syntax(PAGE, FitType.FITB) == [PAGE, Name("FitB")]
    assert xyz_syntax(PAGE, 1, 2) == [PAGE, Name("XYZ"), 1, 2, None]
    assert xyz_syntax(PAGE, 1, 2, 0) == [PAGE, Name("XYZ"), 1, 2, None]
