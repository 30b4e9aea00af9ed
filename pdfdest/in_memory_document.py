"""In-memory document collaborators backed by plain Python containers."""

import logging
from bisect import bisect_left
from collections.abc import Iterable, Mapping
from typing import Any

from pdfdest.pdf_values import Reference

logger = logging.getLogger(__name__)


class ObjectTable:
    """Object graph keyed by indirect reference."""

    def __init__(self, objects: Mapping[Reference, Any] | None = None) -> None:
        self.objects: dict[Reference, Any] = dict(objects or {})

    def dereference(self, ref: Reference) -> Any:
        """Return the object behind ``ref``, following reference-to-reference links."""
        seen: set[Reference] = set()
        value: Any = ref
        while isinstance(value, Reference):
            if value in seen:
                logger.warning("Reference %s points back to itself", ref)
                return None
            seen.add(value)
            value = self.objects.get(value)
        return value


class NameTree:
    """Name registry over a sorted key space, searched by bisection."""

    def __init__(self, entries: Mapping[str, Any] | None = None) -> None:
        entries = entries or {}
        self.keys: list[str] = sorted(entries)
        self.values: list[Any] = [entries[k] for k in self.keys]

    def search(self, name: str) -> Any:
        i = bisect_left(self.keys, name)
        if i < len(self.keys) and self.keys[i] == name:
            return self.values[i]
        return None

    def items(self) -> Iterable[tuple[str, Any]]:
        return zip(self.keys, self.values)


class DestinationsTable:
    """The legacy catalog-level destinations dictionary."""

    def __init__(self, entries: Mapping[str, Any] | None = None) -> None:
        self.entries: dict[str, Any] = dict(entries or {})

    def get(self, name: str) -> Any:
        return self.entries.get(name)


class PageTable:
    """Page-index table: zero-based index to page reference."""

    def __init__(self, page_refs: Iterable[Reference] = ()) -> None:
        self.page_refs: list[Reference] = list(page_refs)

    def page_ref_at(self, index: int) -> Reference | None:
        if 0 <= index < len(self.page_refs):
            return self.page_refs[index]
        return None

    def count(self) -> int:
        return len(self.page_refs)


class PassthroughDecryptor:
    """Decryptor for unencrypted documents: literals are returned as-is."""

    def decrypt(self, literal: str, security_context: Any) -> str:
        return literal
