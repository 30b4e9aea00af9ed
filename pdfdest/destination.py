"""The destination node owned by outline items, annotations and actions."""

import logging
import threading
from collections.abc import Mapping
from enum import Enum
from typing import Any

from pdfdest.collaborators import DocumentContext
from pdfdest.errors import DestinationCycleError
from pdfdest.fit_encoder import encode_navigation_target, xyz_syntax
from pdfdest.fit_type import FitKind, FitType
from pdfdest.load_config import DEFAULT_CONFIG
from pdfdest.navigation_target import NavigationTarget
from pdfdest.normalizer import DestinationNormalizer
from pdfdest.pdf_values import Reference, StringLiteral
from pdfdest.raw_descriptor import DEST_KEY, Named, classify_descriptor

logger = logging.getLogger(__name__)


class ResolutionState(Enum):
    UNRESOLVED = "unresolved"
    RESOLVING = "resolving"
    RESOLVED = "resolved"


class Destination:
    """A raw destination descriptor and its lazily resolved target.

    The raw form is normalized on first access and the result memoized.
    Mutators store a new raw form and reset the node so the next access
    resolves again. A successful named lookup is cached in ``entries``
    under ``D`` so later resolutions skip the lookup.
    """

    def __init__(
        self,
        raw: Any,
        context: DocumentContext,
        config: dict[str, Any] | None = None,
    ) -> None:
        """Initialize with a raw descriptor and the owning document's context."""
        config = config or DEFAULT_CONFIG
        self.context = context
        self.entries: dict[str, Any] = {}
        self._raw = raw
        self._normalizer = DestinationNormalizer(context, config)
        self._cache_named = config.get("resolution", {}).get(
            "cache_named_lookups", True
        )
        self._state = ResolutionState.UNRESOLVED
        self._target: NavigationTarget | None = None
        self._cached_name: str | None = None
        self._lock = threading.RLock()

    @classmethod
    def for_page(
        cls,
        page_ref: Reference,
        x: float,
        y: float,
        context: DocumentContext,
        config: dict[str, Any] | None = None,
    ) -> "Destination":
        """Create an ``[page /XYZ x y null]`` destination."""
        return cls(xyz_syntax(page_ref, x, y), context, config)

    @property
    def state(self) -> ResolutionState:
        return self._state

    @property
    def raw(self) -> Any:
        """The descriptor as stored: array, dictionary, reference or name."""
        return self._raw

    @property
    def target(self) -> NavigationTarget:
        return self.resolve()

    def resolve(self) -> NavigationTarget:
        """Return the resolved target, normalizing on first use."""
        with self._lock:
            if self._state is ResolutionState.RESOLVED and self._target is not None:
                return self._target
            if self._state is ResolutionState.RESOLVING:
                msg = f"Destination {self._raw!r} refers back to itself"
                raise DestinationCycleError(msg)

            self._state = ResolutionState.RESOLVING
            try:
                target = self._normalize()
            except Exception:
                self._state = ResolutionState.UNRESOLVED
                raise
            self._target = target
            self._state = ResolutionState.RESOLVED
            return target

    def _normalize(self) -> NavigationTarget:
        cached = self.entries.get(DEST_KEY)
        if cached is not None and self._cached_name is not None:
            return self._normalizer.resolve(cached).target.with_name(
                self._cached_name
            )

        result = self._normalizer.resolve(self._raw)
        if self._cache_named and result.resolved_array is not None:
            self.entries[DEST_KEY] = list(result.resolved_array)
            self._cached_name = result.target.named_destination
        return result.target

    def refresh(self) -> None:
        """Resolve again on next access, keeping any cached named lookup."""
        with self._lock:
            self._state = ResolutionState.UNRESOLVED
            self._target = None

    # Accessors

    def page_reference(self) -> Reference | None:
        return self.resolve().page_ref

    def fit_type(self) -> FitKind | None:
        return self.resolve().fit_type

    def left(self) -> float | None:
        return self.resolve().left

    def top(self) -> float | None:
        return self.resolve().top

    def right(self) -> float | None:
        return self.resolve().right

    def bottom(self) -> float | None:
        return self.resolve().bottom

    def zoom(self) -> float | None:
        return self.resolve().zoom

    def named_destination(self) -> str | None:
        return self.resolve().named_destination

    def encoded_form(self) -> list[object]:
        """The resolved target as a destination array, for persistence."""
        return encode_navigation_target(self.resolve())

    def raw_list(self) -> list[Any] | None:
        """The destination array behind the raw form, if there is one."""
        if isinstance(self._raw, (list, tuple)):
            return list(self._raw)
        if isinstance(self._raw, Mapping):
            nested = self._raw.get(DEST_KEY)
            return list(nested) if isinstance(nested, (list, tuple)) else None
        return self.entries.get(DEST_KEY)

    def raw_entries(self) -> dict[str, Any] | None:
        """The raw form as a ``{D: array}`` dictionary, if it can be one."""
        if isinstance(self._raw, (list, tuple)):
            return {DEST_KEY: list(self._raw)}
        if isinstance(self._raw, Mapping):
            return dict(self._raw)
        return dict(self.entries) or None

    # Mutators

    def replace_descriptor(self, raw: Any) -> None:
        """Point the node at a new raw descriptor."""
        with self._lock:
            self._raw = raw
            self.entries.clear()
            self._cached_name = None
            self.refresh()

    def set_named_destination(self, name: str | StringLiteral | None) -> None:
        """Point the node at a named destination; None detaches it."""
        if name is None:
            self.clear_named_destination()
            return
        self.replace_descriptor(name)

    def clear_named_destination(self) -> None:
        """Drop the name, keeping the array it last resolved to if any."""
        with self._lock:
            if not isinstance(classify_descriptor(self._raw), Named):
                self.refresh()
                return
            cached = self.entries.get(DEST_KEY)
            if cached is not None:
                self.replace_descriptor(list(cached))
                return
            target = self.resolve()
            if target.page_ref is None:
                self.replace_descriptor(None)
            else:
                self.replace_descriptor(encode_navigation_target(target))

    def set_view(self, left: float | None, top: float | None) -> None:
        """Re-target the node at ``[page /XYZ left top zoom]`` on its current page.

        The zoom is kept when the node is already XYZ.
        """
        with self._lock:
            current = self.resolve()
            zoom = current.zoom if current.fit_type is FitType.XYZ else None
            logger.debug(
                "Setting view of %s to left=%s top=%s", current.page_ref, left, top
            )
            self.replace_descriptor(xyz_syntax(current.page_ref, left, top, zoom))

    def __str__(self) -> str:
        return str(self.resolve())
