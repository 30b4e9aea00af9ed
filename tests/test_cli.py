"""Integration tests for the command-line interface."""

import json
import sys
from pathlib import Path
from unittest.mock import patch

import pytest
import yaml

from pdfdest.cli import main

DOCUMENT = """\
pages: ["3 0 R", "7 0 R"]
names:
  Intro: ["3 0 R", /XYZ, 0, 792, 0]
links:
  - id: outline-1
    dest: /Intro
  - id: annot-1
    dest: ["7 0 R", /FitH, 400]
  - id: broken
    dest: /Nowhere
"""


@pytest.fixture
def doc_path(tmp_path: Path) -> Path:
    """Fixture writing a small document description."""
    path = tmp_path / "doc.yml"
    path.write_text(DOCUMENT, encoding="utf-8")
    return path


def run_cli(args: list[str]) -> int:
    """Run the CLI with mocked arguments."""
    with patch.object(sys, "argv", ["pdfdest", *args]):
        return main()


def test_resolve_named(doc_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    """Verify that resolve prints the target and its encoded form."""
    assert run_cli(["resolve", str(doc_path), "/Intro"]) == 0

    out = yaml.safe_load(capsys.readouterr().out)
    assert out["target"]["page_ref"] == "3 0 R"
    assert out["target"]["fit_type"] == "XYZ"
    assert out["target"]["zoom"] is None
    assert "right" not in out["target"]
    assert out["target"]["named_destination"] == "Intro"
    assert out["encoded"] == ["3 0 R", "/XYZ", 0.0, 792.0]


def test_resolve_array_with_page_index(
    doc_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    """Verify that an inline array with a page index resolves."""
    assert run_cli(["resolve", str(doc_path), "[1, /FitR, 0, 0, 100, null]"]) == 0
    out = yaml.safe_load(capsys.readouterr().out)
    assert out["target"]["page_ref"] == "7 0 R"
    assert out["target"]["top"] is None
    assert out["encoded"] == ["7 0 R", "/FitR", 0.0, 0.0, 100.0]


def test_report_to_file(doc_path: Path, tmp_path: Path) -> None:
    """Verify that report writes a JSON summary of every link."""
    out_file = tmp_path / "report.json"
    assert run_cli(["report", str(doc_path), "--out", str(out_file)]) == 0

    content = json.loads(out_file.read_text(encoding="utf-8"))
    assert content["meta"]["total_links"] == 3  # noqa: PLR2004
    assert content["stats"]["status_counts"] == {"resolved": 2, "unresolved_name": 1}
    assert content["stats"]["unresolved_names"] == ["Nowhere"]


def test_report_to_stdout(doc_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    """Verify that report prints JSON when no output file is given."""
    assert run_cli(["report", str(doc_path)]) == 0
    content = json.loads(capsys.readouterr().out)
    assert [r["id"] for r in content["results"]] == ["outline-1", "annot-1", "broken"]


def test_set_view_writes_document(doc_path: Path) -> None:
    """Verify that set-view persists the re-encoded destination."""
    assert run_cli(["set-view", str(doc_path), "annot-1", "10", "20", "--write"]) == 0

    saved = yaml.safe_load(doc_path.read_text(encoding="utf-8"))
    annot = next(link for link in saved["links"] if link["id"] == "annot-1")
    assert annot["dest"] == ["7 0 R", "/XYZ", 10.0, 20.0, None]


def test_set_view_without_write(doc_path: Path) -> None:
    """Verify that set-view leaves the file alone without --write."""
    before = doc_path.read_text(encoding="utf-8")
    assert run_cli(["set-view", str(doc_path), "outline-1", "1", "2"]) == 0
    assert doc_path.read_text(encoding="utf-8") == before


def test_set_view_unknown_link(doc_path: Path) -> None:
    """Verify that an unknown link id exits with a message."""
    with pytest.raises(SystemExit, match="No link with id"):
        run_cli(["set-view", str(doc_path), "nope", "1", "2"])


def test_missing_document(tmp_path: Path) -> None:
    """Verify that a missing document exits with a message."""
    with pytest.raises(SystemExit, match="Document file not found"):
        run_cli(["report", str(tmp_path / "absent.yml")])
