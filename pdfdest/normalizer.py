"""Normalization of raw destination descriptors into navigation targets.

The normalizer classifies the descriptor, follows indirect references,
action dictionaries and named-destination lookups until it reaches an
array, then hands that array to the fit-type decoder. It never raises for
malformed input: every descriptor resolves to some NavigationTarget, at
worst an empty one.
"""

import logging
from dataclasses import dataclass
from typing import Any

from pdfdest.collaborators import DocumentContext
from pdfdest.fit_decoder import decode_destination_array
from pdfdest.fit_encoder import encode_navigation_target
from pdfdest.load_config import DEFAULT_CONFIG
from pdfdest.navigation_target import NavigationTarget, TargetStatus
from pdfdest.pdf_values import Name, Reference, StringLiteral
from pdfdest.raw_descriptor import (
    ActionLike,
    AlreadyResolved,
    ArrayForm,
    IndirectRef,
    Named,
    classify_descriptor,
)

logger = logging.getLogger(__name__)

EMPTY_TARGET = NavigationTarget()


@dataclass(frozen=True)
class Normalization:
    """A normalized target plus the array a named lookup resolved to."""

    target: NavigationTarget
    resolved_array: tuple[Any, ...] | None = None


class DestinationNormalizer:
    """Resolves raw descriptors against one document's collaborators."""

    def __init__(
        self, context: DocumentContext, config: dict[str, Any] | None = None
    ) -> None:
        """Initialize with the document collaborators and resolution config."""
        self.context = context
        settings = (config or DEFAULT_CONFIG).get("resolution", {})
        defaults = DEFAULT_CONFIG["resolution"]
        self.max_redirects: int = settings.get(
            "max_redirects", defaults["max_redirects"]
        )
        self.null_tokens = frozenset(
            settings.get("null_tokens", defaults["null_tokens"])
        )

    def resolve(self, raw: Any) -> Normalization:
        """Normalize ``raw``; a named lookup also reports the array it found."""
        return self._resolve(raw, hops=0, seen=set())

    def _resolve(self, raw: Any, hops: int, seen: set[Any]) -> Normalization:
        if hops > self.max_redirects:
            logger.warning(
                "Destination chain exceeds %d redirects; leaving it unresolved",
                self.max_redirects,
            )
            return Normalization(EMPTY_TARGET)

        descriptor = classify_descriptor(raw)
        match descriptor:
            case IndirectRef(ref=ref):
                if self._revisits(ref, seen):
                    return Normalization(EMPTY_TARGET)
                return self._resolve(self._dereference(ref), hops + 1, seen)
            case ActionLike(mapping=mapping):
                if self._revisits(("dict", id(mapping)), seen):
                    return Normalization(EMPTY_TARGET)
                return self._resolve(descriptor.nested, hops, seen)
            case AlreadyResolved(target=target):
                if target.status is TargetStatus.UNRESOLVED_NAME:
                    return self._resolve(target.named_destination, hops, seen)
                encoded = encode_navigation_target(target)
                return self._resolve(encoded, hops, seen)
            case ArrayForm(items=items):
                return Normalization(self._decode(items))
            case Named(token=token):
                return self._resolve_named(token, hops, seen)
            case None:
                if raw is not None:
                    logger.debug("Unrecognized destination descriptor %r", raw)
                return Normalization(EMPTY_TARGET)

    def _resolve_named(
        self, token: Name | StringLiteral | str, hops: int, seen: set[Any]
    ) -> Normalization:
        name = self._name_text(token)
        if name is None:
            return Normalization(EMPTY_TARGET)
        if self._revisits(("name", name), seen):
            return Normalization(NavigationTarget(named_destination=name))

        if self.context.names is not None:
            found = self._lookup(self.context.names.search(name), hops, seen)
            if found is not None:
                return Normalization(found.target.with_name(name), found.resolved_array)

        # registry miss, or an entry that leads nowhere: try the legacy dictionary,
        # which is keyed by the raw name token
        if self.context.legacy_dests is not None:
            key = token.value if isinstance(token, StringLiteral) else str(token)
            found = self._lookup(self.context.legacy_dests.get(key), hops, seen)
            if found is not None:
                logger.debug("Named destination %r found in legacy dictionary", name)
                return Normalization(found.target.with_name(name), found.resolved_array)

        logger.info("Named destination %r could not be resolved", name)
        return Normalization(NavigationTarget(named_destination=name))

    def _lookup(self, payload: Any, hops: int, seen: set[Any]) -> Normalization | None:
        """Resolve a lookup payload; None unless it led to an array or a page."""
        if payload is None:
            return None
        nested = self._resolve_payload(payload, hops + 1, seen)
        if nested.target.status is TargetStatus.RESOLVED or nested.resolved_array:
            return nested
        return None

    def _resolve_payload(
        self, payload: Any, hops: int, seen: set[Any]
    ) -> Normalization:
        """Unwrap a lookup payload, remembering the array it leads to."""
        if hops > self.max_redirects:
            return self._resolve(payload, hops, seen)
        descriptor = classify_descriptor(payload)
        match descriptor:
            case ArrayForm(items=items):
                return Normalization(self._decode(items), items)
            case IndirectRef(ref=ref):
                if self._revisits(ref, seen):
                    return Normalization(EMPTY_TARGET)
                return self._resolve_payload(self._dereference(ref), hops + 1, seen)
            case ActionLike(mapping=mapping):
                if self._revisits(("dict", id(mapping)), seen):
                    return Normalization(EMPTY_TARGET)
                return self._resolve_payload(descriptor.nested, hops, seen)
            case AlreadyResolved(target=target) if (
                target.status is not TargetStatus.UNRESOLVED_NAME
            ):
                items = tuple(encode_navigation_target(target))
                return Normalization(self._decode(items), items)
            case _:
                return self._resolve(payload, hops, seen)

    def _decode(self, items: tuple[Any, ...] | list[Any]) -> NavigationTarget:
        return decode_destination_array(items, self.context.pages, self.null_tokens)

    def _dereference(self, ref: Reference) -> Any:
        if self.context.objects is None:
            logger.debug("No object graph to dereference %s", ref)
            return None
        value = self.context.objects.dereference(ref)
        if value is None:
            logger.info("Reference %s does not resolve to an object", ref)
        return value

    def _name_text(self, token: Name | StringLiteral | str) -> str | None:
        if isinstance(token, StringLiteral):
            if token.encrypted and self.context.decryptor is not None:
                text = self.context.decryptor.decrypt(
                    token.value, self.context.security_context
                )
            else:
                text = token.value
        else:
            text = str(token)
        return text or None

    @staticmethod
    def _revisits(key: Any, seen: set[Any]) -> bool:
        if key in seen:
            logger.warning("Cyclic destination chain through %s", key)
            return True
        seen.add(key)
        return False


def normalize(
    raw: Any, context: DocumentContext, config: dict[str, Any] | None = None
) -> NavigationTarget:
    """Resolve a raw destination descriptor into a NavigationTarget."""
    return DestinationNormalizer(context, config).resolve(raw).target
