"""Tests for the ResolutionReport logic."""

import json
from pathlib import Path

from pdfdest.fit_type import FitType
from pdfdest.navigation_target import NavigationTarget
from pdfdest.pdf_values import Name, Reference
from pdfdest.load_config import DEFAULT_CONFIG, merge_config
from pdfdest.resolution_report import (
    LinkResolution,
    ResolutionReport,
    config_fingerprint,
)


def test_resolution_report_generation(tmp_path: Path) -> None:
    """Verify that the resolution report is generated correctly."""
    report = ResolutionReport("hash123", source="doc.yml")

    resolved = NavigationTarget(page_ref=Reference(3), fit_type=FitType.FIT)
    report.add_result(
        LinkResolution("a", "outline", resolved, [Reference(3), Name("Fit")])
    )
    report.add_result(
        LinkResolution(
            "b",
            "link",
            NavigationTarget(named_destination="Gone"),
            [None],
        )
    )
    report.add_result(LinkResolution("c", "link", NavigationTarget(), [None]))

    output_file = tmp_path / "report.json"
    report.generate_report(str(output_file))

    assert output_file.exists()
    content = json.loads(output_file.read_text(encoding="utf-8"))

    assert content["meta"]["config_hash"] == "hash123"
    assert content["meta"]["source"] == "doc.yml"
    assert content["meta"]["total_links"] == 3  # noqa: PLR2004
    assert content["results"][0]["page_ref"] == "3 0 R"
    assert content["results"][0]["encoded"] == ["3 0 R", "/Fit"]
    assert "left" not in content["results"][0]
    assert content["results"][1]["status"] == "unresolved_name"

    stats = content["stats"]
    assert stats["status_counts"] == {
        "resolved": 1,
        "unresolved_name": 1,
        "unresolved": 1,
    }
    assert stats["fit_type_counts"] == {"Fit": 1, "none": 2}
    assert stats["unresolved_names"] == ["Gone"]


def test_config_fingerprint_ignores_key_order() -> None:
    """Verify that the fingerprint does not depend on key order."""
    first = {"resolution": {"max_redirects": 8, "null_tokens": ["null"]}}
    second = {"resolution": {"null_tokens": ["null"], "max_redirects": 8}}
    assert config_fingerprint(first) == config_fingerprint(second)


def test_config_fingerprint_tracks_resolution_settings() -> None:
    """Verify that only resolution settings change the fingerprint."""
    base = config_fingerprint(DEFAULT_CONFIG)
    noisy = merge_config(DEFAULT_CONFIG, {"logging": {"level": "DEBUG"}})
    deeper = merge_config(DEFAULT_CONFIG, {"resolution": {"max_redirects": 2}})
    assert config_fingerprint(noisy) == base
    assert config_fingerprint(deeper) != base
    assert len(base) == 64  # noqa: PLR2004
