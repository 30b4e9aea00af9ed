"""Interfaces of the document services destination resolution relies on."""

from dataclasses import dataclass
from typing import Any, Protocol

from pdfdest.pdf_values import Reference


class ObjectGraph(Protocol):
    def dereference(self, ref: Reference) -> Any:
        """Return the object behind ``ref``, or None when it is missing."""


class NameRegistry(Protocol):
    def search(self, name: str) -> Any:
        """Return the payload stored under ``name``, or None."""


class DestinationsDictionary(Protocol):
    def get(self, name: str) -> Any:
        """Return the payload stored under ``name``, or None."""


class PageIndex(Protocol):
    def page_ref_at(self, index: int) -> Reference | None: ...

    def count(self) -> int: ...


class StringDecryptor(Protocol):
    def decrypt(self, literal: str, security_context: Any) -> str: ...


@dataclass
class DocumentContext:
    """The collaborators a normalizer may consult, passed in explicitly.

    Any of them may be None for documents that lack the structure.
    """

    objects: ObjectGraph | None = None
    names: NameRegistry | None = None
    legacy_dests: DestinationsDictionary | None = None
    pages: PageIndex | None = None
    decryptor: StringDecryptor | None = None
    security_context: Any = None
