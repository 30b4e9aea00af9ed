"""Report of how every link in a document resolved."""

import hashlib
import json
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from pdfdest.load_document import dump_literal
from pdfdest.navigation_target import NavigationTarget, target_to_dict


def config_fingerprint(config: dict[str, Any]) -> str:
    """Stamp for a report: digest of the settings that shape resolution.

    Logging settings are left out, so only configs that could resolve a link
    differently get different stamps.
    """
    settings = config.get("resolution", {})
    canonical = json.dumps(settings, sort_keys=True, separators=(",", ":"))
    return hashlib.sha256(canonical.encode()).hexdigest()


@dataclass
class LinkResolution:
    """Outcome of resolving one navigation node."""

    link_id: str
    kind: str
    target: NavigationTarget
    encoded: list[object]


class ResolutionReport:
    def __init__(self, config_hash: str, source: str = "") -> None:
        self.config_hash = config_hash
        self.source = source
        self.results: list[LinkResolution] = []
        self.start_time = time.time()

    def add_result(self, result: LinkResolution) -> None:
        self.results.append(result)

    def to_dict(self) -> dict[str, Any]:
        return {
            "meta": {
                "timestamp": time.time(),
                "duration": time.time() - self.start_time,
                "config_hash": self.config_hash,
                "source": self.source,
                "total_links": len(self.results),
            },
            "results": [
                {
                    "id": r.link_id,
                    "kind": r.kind,
                    **target_to_dict(r.target),
                    "encoded": dump_literal(r.encoded),
                }
                for r in self.results
            ],
            "stats": self._compute_stats(),
        }

    def generate_report(self, path: str) -> None:
        Path(path).write_text(json.dumps(self.to_dict(), indent=2), encoding="utf-8")

    def _compute_stats(self) -> dict[str, Any]:
        status_counts: dict[str, int] = {}
        fit_counts: dict[str, int] = {}
        for r in self.results:
            status = r.target.status.value
            status_counts[status] = status_counts.get(status, 0) + 1
            fit = r.target.fit_token or "none"
            fit_counts[fit] = fit_counts.get(fit, 0) + 1
        return {
            "status_counts": status_counts,
            "fit_type_counts": fit_counts,
            "unresolved_names": sorted(
                {
                    r.target.named_destination
                    for r in self.results
                    if r.target.page_ref is None and r.target.named_destination
                }
            ),
        }
