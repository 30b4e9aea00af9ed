"""Command-line interface for resolving and editing document destinations."""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

import yaml

from pdfdest.destination import Destination
from pdfdest.errors import DestinationError
from pdfdest.load_config import load_config
from pdfdest.load_document import (
    LoadedDocument,
    dump_literal,
    load_document,
    parse_literal,
    save_document,
)
from pdfdest.navigation_target import target_to_dict
from pdfdest.resolution_report import (
    LinkResolution,
    ResolutionReport,
    config_fingerprint,
)

logger = logging.getLogger(__name__)


def configure_logging(config: dict[str, Any], *, verbose: bool = False) -> None:
    """Configure the root logger from the ``logging`` config section."""
    section = config.get("logging", {})
    level = "DEBUG" if verbose else str(section.get("level", "WARNING")).upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.WARNING),
        format=section.get("format", "%(levelname)s %(name)s: %(message)s"),
        stream=sys.stderr,
    )


def cmd_resolve(
    args: argparse.Namespace, doc: LoadedDocument, config: dict[str, Any]
) -> int:
    """Resolve a single descriptor given on the command line."""
    try:
        raw = parse_literal(yaml.safe_load(args.dest))
    except yaml.YAMLError as e:
        msg = f"Could not parse destination {args.dest!r}: {e}"
        raise SystemExit(msg) from e

    dest = Destination(raw, doc.context, config)
    out = {
        "target": target_to_dict(dest.target),
        "encoded": dump_literal(dest.encoded_form()),
    }
    print(yaml.safe_dump(out, sort_keys=False), end="")
    return 0


def cmd_report(
    args: argparse.Namespace, doc: LoadedDocument, config: dict[str, Any]
) -> int:
    """Resolve every link in the document and write a JSON report."""
    report = ResolutionReport(config_fingerprint(config), source=str(args.document))
    for entry in doc.links:
        dest = Destination(entry.dest, doc.context, config)
        report.add_result(
            LinkResolution(
                link_id=entry.id,
                kind=entry.kind,
                target=dest.target,
                encoded=dest.encoded_form(),
            )
        )

    if args.out:
        report.generate_report(str(args.out))
        print(f"Resolved {len(report.results)} links. Report written to: {args.out}")
    else:
        print(json.dumps(report.to_dict(), indent=2))
    return 0


def cmd_set_view(
    args: argparse.Namespace, doc: LoadedDocument, config: dict[str, Any]
) -> int:
    """Point a link at an XYZ view on its current page."""
    entry = doc.link(args.link_id)
    if entry is None:
        msg = f"No link with id {args.link_id!r} in {args.document}"
        raise SystemExit(msg)

    dest = Destination(entry.dest, doc.context, config)
    if dest.page_reference() is None:
        logger.warning(
            "Link %s has no resolvable page; writing an unresolved view", entry.id
        )
    dest.set_view(args.left, args.top)
    entry.dest = dest.raw
    edited = {"id": entry.id, "dest": dump_literal(entry.dest)}
    print(yaml.safe_dump(edited, sort_keys=False), end="")

    if args.write:
        save_document(doc, args.document)
        logger.info("Saved %s", args.document)
    return 0


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="pdfdest",
        description=(
            "Resolve and edit destinations (page, position, zoom) of a document."
        ),
    )
    ap.add_argument("--config", help="Path to configuration file")
    ap.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = ap.add_subparsers(dest="command", required=True)

    p = sub.add_parser("resolve", help="Resolve one destination descriptor")
    p.add_argument("document", type=Path, help="YAML document description")
    p.add_argument(
        "dest",
        help="Descriptor as YAML, e.g. '/Intro' or '[\"3 0 R\", /XYZ, 0, 700, null]'",
    )
    p.set_defaults(func=cmd_resolve)

    p = sub.add_parser("report", help="Resolve every link and report the outcome")
    p.add_argument("document", type=Path, help="YAML document description")
    p.add_argument(
        "--out", type=Path, help="Write the JSON report here instead of stdout"
    )
    p.set_defaults(func=cmd_report)

    p = sub.add_parser("set-view", help="Re-target a link at [page /XYZ left top]")
    p.add_argument("document", type=Path, help="YAML document description")
    p.add_argument("link_id", help="Id of the link to edit")
    p.add_argument("left", type=float)
    p.add_argument("top", type=float)
    p.add_argument(
        "--write", action="store_true", help="Save the edited document in place"
    )
    p.set_defaults(func=cmd_set_view)
    return ap


def main(argv: list[str] | None = None) -> int:
    """Run the command-line interface."""
    args = build_parser().parse_args(argv)
    try:
        config = load_config(args.config)
        configure_logging(config, verbose=args.verbose)
        doc = load_document(args.document)
        return args.func(args, doc, config)
    except DestinationError as e:
        raise SystemExit(str(e)) from e


if __name__ == "__main__":
    raise SystemExit(main())
