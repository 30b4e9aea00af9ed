"""Data model for a resolved navigation target."""

from dataclasses import dataclass, replace
from enum import Enum

from pdfdest.fit_type import FitKind, fit_fields
from pdfdest.pdf_values import Reference


class TargetStatus(str, Enum):
    """Which of the three resolution outcomes a target represents."""

    RESOLVED = "resolved"
    UNRESOLVED_NAME = "unresolved_name"
    UNRESOLVED = "unresolved"


@dataclass(frozen=True)
class NavigationTarget:
    """A page, a position on that page and a zoom level.

    Every coordinate is optional. ``None`` means "keep the viewer's current
    value", which is not the same as ``0.0``.
    """

    page_ref: Reference | None = None
    fit_type: FitKind | None = None
    left: float | None = None
    top: float | None = None
    right: float | None = None
    bottom: float | None = None
    zoom: float | None = None
    named_destination: str | None = None

    @property
    def status(self) -> TargetStatus:
        if self.page_ref is not None:
            return TargetStatus.RESOLVED
        if self.named_destination is not None:
            return TargetStatus.UNRESOLVED_NAME
        return TargetStatus.UNRESOLVED

    @property
    def fit_token(self) -> str | None:
        if self.fit_type is None:
            return None
        return self.fit_type.token

    def with_name(self, name: str | None) -> "NavigationTarget":
        """Return a copy carrying ``name`` as its named destination."""
        return replace(self, named_destination=name)

    def coordinates(self) -> dict[str, float | None]:
        """Return the coordinate fields meaningful for this fit type."""
        return {f: getattr(self, f) for f in fit_fields(self.fit_type)}

    def __str__(self) -> str:
        return (
            f"Destination  ref: {self.page_ref} ,  top: {self.top} ,  "
            f"left: {self.left} ,  zoom: {self.zoom}"
        )


def target_to_dict(target: NavigationTarget) -> dict[str, object]:
    """Flatten a target into plain values for YAML/JSON output.

    Only the coordinates its fit type uses are included.
    """
    return {
        "status": target.status.value,
        "page_ref": str(target.page_ref) if target.page_ref is not None else None,
        "fit_type": target.fit_token,
        **target.coordinates(),
        "named_destination": target.named_destination,
    }
