"""Loading and saving YAML descriptions of a document's navigation data.

The file lists the page-index table, indirect objects, the name registry,
the legacy destinations dictionary and the link nodes whose destinations
should be resolved. Literals follow a compact text convention:

- ``"12 0 R"`` is an indirect reference
- ``"/XYZ"`` is a name token
- ``"(Chapter 1)"`` is a string literal
- YAML ``null`` is the null keyword
"""

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from pdfdest.collaborators import DocumentContext
from pdfdest.errors import DocumentLoadError
from pdfdest.in_memory_document import (
    DestinationsTable,
    NameTree,
    ObjectTable,
    PageTable,
    PassthroughDecryptor,
)
from pdfdest.pdf_values import Name, Reference, StringLiteral

REFERENCE_RE = re.compile(r"^\s*(\d+)\s+(\d+)\s+R\s*$")


@dataclass
class LinkEntry:
    """A navigation node (outline item, link annotation, action) in the file."""

    id: str
    dest: Any
    kind: str = "link"


@dataclass
class LoadedDocument:
    context: DocumentContext
    links: list[LinkEntry] = field(default_factory=list)

    def link(self, link_id: str) -> LinkEntry | None:
        for entry in self.links:
            if entry.id == link_id:
                return entry
        return None


def parse_literal(value: Any) -> Any:
    """Convert a YAML value into destination literals."""
    if isinstance(value, str):
        m = REFERENCE_RE.match(value)
        if m:
            return Reference(int(m.group(1)), int(m.group(2)))
        if value.startswith("/"):
            return Name(value[1:])
        if value.startswith("(") and value.endswith(")") and len(value) > 1:
            return StringLiteral(value[1:-1])
        return value
    if isinstance(value, list):
        return [parse_literal(v) for v in value]
    if isinstance(value, dict):
        return {str(k).lstrip("/"): parse_literal(v) for k, v in value.items()}
    return value


def dump_literal(value: Any) -> Any:
    """Inverse of parse_literal, producing plain YAML-safe values."""
    if isinstance(value, Reference):
        return str(value)
    if isinstance(value, Name):
        return f"/{value}"
    if isinstance(value, StringLiteral):
        return f"({value.value})"
    if isinstance(value, (list, tuple)):
        return [dump_literal(v) for v in value]
    if isinstance(value, dict):
        return {k: dump_literal(v) for k, v in value.items()}
    return value


def parse_reference(text: Any) -> Reference:
    ref = parse_literal(text)
    if not isinstance(ref, Reference):
        msg = f"Expected an indirect reference like '12 0 R', got {text!r}"
        raise DocumentLoadError(msg)
    return ref


def load_document(path: Path) -> LoadedDocument:
    """Read a document description into collaborators and link entries."""
    if not path.exists():
        msg = f"Document file not found: {path}"
        raise DocumentLoadError(msg)
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        msg = f"Invalid document file {path}: {e}"
        raise DocumentLoadError(msg) from e
    if not isinstance(data, dict):
        msg = f"Document file {path} must contain a mapping"
        raise DocumentLoadError(msg)
    return build_document(data)


def build_document(data: dict[str, Any]) -> LoadedDocument:
    """Build collaborators and link entries from already-parsed YAML data."""
    objects = {
        parse_reference(k): parse_literal(v)
        for k, v in (data.get("objects") or {}).items()
    }
    names = {str(k): parse_literal(v) for k, v in (data.get("names") or {}).items()}
    dests = {str(k): parse_literal(v) for k, v in (data.get("dests") or {}).items()}
    pages = [parse_reference(p) for p in data.get("pages") or []]

    context = DocumentContext(
        objects=ObjectTable(objects),
        names=NameTree(names) if "names" in data else None,
        legacy_dests=DestinationsTable(dests) if "dests" in data else None,
        pages=PageTable(pages),
        decryptor=PassthroughDecryptor(),
    )

    links = []
    for i, raw in enumerate(data.get("links") or []):
        if not isinstance(raw, dict):
            msg = f"Link entry #{i} must be a mapping, got {raw!r}"
            raise DocumentLoadError(msg)
        links.append(
            LinkEntry(
                id=str(raw.get("id", f"link-{i}")),
                dest=parse_literal(raw.get("dest")),
                kind=str(raw.get("kind", "link")),
            )
        )
    return LoadedDocument(context=context, links=links)


def save_document(doc: LoadedDocument, path: Path) -> None:
    """Write a document description back out, e.g. after editing a link."""
    ctx = doc.context
    data: dict[str, Any] = {}
    if isinstance(ctx.pages, PageTable):
        data["pages"] = [str(p) for p in ctx.pages.page_refs]
    if isinstance(ctx.objects, ObjectTable):
        data["objects"] = {
            str(k): dump_literal(v) for k, v in ctx.objects.objects.items()
        }
    if isinstance(ctx.names, NameTree):
        data["names"] = {k: dump_literal(v) for k, v in ctx.names.items()}
    if isinstance(ctx.legacy_dests, DestinationsTable):
        data["dests"] = {
            k: dump_literal(v) for k, v in ctx.legacy_dests.entries.items()
        }
    data["links"] = [
        {"id": e.id, "kind": e.kind, "dest": dump_literal(e.dest)} for e in doc.links
    ]
    path.write_text(yaml.safe_dump(data, sort_keys=False), encoding="utf-8")
