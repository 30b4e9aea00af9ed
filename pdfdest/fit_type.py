"""Fit types of the destination array syntax."""

from dataclasses import dataclass, field
from enum import Enum


class FitType(str, Enum):
    """View-framing modes a destination array can request."""

    XYZ = "XYZ"
    FIT = "Fit"
    FITH = "FitH"
    FITV = "FitV"
    FITR = "FitR"
    FITB = "FitB"
    FITBH = "FitBH"
    FITBV = "FitBV"

    @property
    def token(self) -> str:
        return self.value


@dataclass(frozen=True)
class UnknownFitType:
    """A fit token outside the enum, carried through untouched.

    ``operands`` keeps everything after the token so re-encoding is lossless.
    ``literal`` holds the original slot value when it was not a name.
    """

    token: str
    operands: tuple[object, ...] = ()
    literal: object = field(default=None, compare=False)


FitKind = FitType | UnknownFitType

# Operand layout after [page, /Type ...], in array order.
FIT_TYPE_FIELDS: dict[FitType, tuple[str, ...]] = {
    FitType.XYZ: ("left", "top", "zoom"),
    FitType.FIT: (),
    FitType.FITH: ("top",),
    FitType.FITV: ("left",),
    FitType.FITR: ("left", "bottom", "right", "top"),
    FitType.FITB: (),
    FitType.FITBH: ("top",),
    FitType.FITBV: ("left",),
}

_BY_TOKEN = {ft.value: ft for ft in FitType}


def parse_fit_type(token: str, operands: tuple[object, ...] = ()) -> FitKind:
    """Map a fit token to its FitType, or wrap it as UnknownFitType."""
    known = _BY_TOKEN.get(token)
    if known is not None:
        return known
    return UnknownFitType(token=token, operands=operands)


def fit_fields(fit_type: FitKind | None) -> tuple[str, ...]:
    """Return the coordinate fields meaningful for a fit type."""
    if isinstance(fit_type, FitType):
        return FIT_TYPE_FIELDS[fit_type]
    return ()
