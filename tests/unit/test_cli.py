"""Tests for CLI module."""

import json
import logging
from pathlib import Path

import pytest

from vv_results.aggregator import compare, summarize
from vv_results.cli import (
    build_parser,
    format_details,
    log_comparison,
    log_summary,
    run,
)
from vv_results.report import build_report
from vv_results.testing.factories import FailingStatusFactory, VerdictFactory

DOCUMENT = {
    "runs": {
        "a.c": [{"compilation": {"result": 0}, "runtime": {"result": 0}}],
        "b.c": [
            {
                "compilation": {"result": 0},
                "runtime": {"result": 1, "stderr": "Segmentation fault"},
            }
        ],
        "c.cpp": [{"compilation": {"result": 2, "stderr": "error: bad clause"}}],
    }
}


@pytest.fixture
def results_file(tmp_path: Path) -> Path:
    """Write the sample document in the legacy wrapped format."""
    path = tmp_path / "results.json"
    path.write_text(f"var jsonResults = {json.dumps(DOCUMENT)};")
    return path


def test_log_summary(caplog: pytest.LogCaptureFixture) -> None:
    """Logs per-language totals and failing tests."""
    summary = summarize(
        [
            VerdictFactory.build(name="a.c"),
            VerdictFactory.build(
                name="b.c",
                runtime=FailingStatusFactory.build(reason="Segmentation fault"),
            ),
        ]
    )

    with caplog.at_level(logging.INFO):
        log_summary(logging.getLogger(), "results.json", summary)

    assert "Results for results.json (full mode):" in caplog.text
    assert "C: 1/2 passed, 1 failed" in caplog.text
    assert "❌ b.c: Segmentation fault" in caplog.text


def test_log_comparison(caplog: pytest.LogCaptureFixture) -> None:
    """Logs side-by-side pass counts."""
    result = compare([VerdictFactory.build(name="a.c")], [])

    with caplog.at_level(logging.INFO):
        log_comparison(logging.getLogger(), "v1.json", "v2.json", result)

    assert "Comparison (full mode): v1.json vs v2.json" in caplog.text
    assert "C: 1/1 vs 0/0" in caplog.text


def test_format_details() -> None:
    """Formats the selected view for JSON output."""
    report = build_report("results.json", json.dumps(DOCUMENT))

    output = format_details(report, "fail")

    assert output["view"] == "fail"
    assert output["total"] == 2
    assert [test["name"] for test in output["tests"]] == ["b.c", "c.cpp"]


async def test_summary_command(
    results_file: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    """Prints the summary as JSON."""
    args = build_parser().parse_args(["summary", str(results_file)])

    exit_code = await run(args)

    assert exit_code == 0
    output = json.loads(capsys.readouterr().out)
    assert output["mode"] == "full"
    assert output["languages"]["C"] == {"total": 2, "passed": 1, "failed": 1}
    assert output["languages"]["C++"]["total"] == 0
    assert output["failures"] == [{"name": "b.c", "reason": "Segmentation fault"}]


async def test_summary_command_compiler_mode(
    results_file: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    """--mode compiler counts build results."""
    args = build_parser().parse_args(
        ["summary", str(results_file), "--mode", "compiler"]
    )

    assert await run(args) == 0

    output = json.loads(capsys.readouterr().out)
    assert output["languages"]["C++"] == {"total": 1, "passed": 0, "failed": 1}
    assert output["failures"] == [{"name": "c.cpp", "reason": "error: bad clause"}]


async def test_config_file_with_cli_override(
    results_file: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    """Command-line options override the config file."""
    config_file = tmp_path / "vv.yaml"
    config_file.write_text("mode: compiler\n")
    args = build_parser().parse_args(
        ["summary", str(results_file), "--config", str(config_file), "--mode", "full"]
    )

    assert await run(args) == 0

    assert json.loads(capsys.readouterr().out)["mode"] == "full"


async def test_details_command_prints_json(
    results_file: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    """Prints per-test details when no format is given."""
    args = build_parser().parse_args(
        ["details", str(results_file), "--filter", "compiler-failures"]
    )

    assert await run(args) == 0

    output = json.loads(capsys.readouterr().out)
    assert [test["name"] for test in output["tests"]] == ["c.cpp"]
    assert output["tests"][0]["runtime_result"] == "Unknown"


async def test_details_command_exports_csv(
    results_file: Path, tmp_path: Path
) -> None:
    """Exports to a file, adding the exporter suffix when missing."""
    args = build_parser().parse_args(
        [
            "details",
            str(results_file),
            "--format",
            "csv",
            "--output",
            str(tmp_path / "report"),
        ]
    )

    assert await run(args) == 0

    lines = (tmp_path / "report.csv").read_text().splitlines()
    assert lines[0].startswith("name,language,compiler_result")
    assert len(lines) == 4


async def test_compare_command(
    results_file: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    """Prints per-language pass counts for both files."""
    second = tmp_path / "second.json"
    second.write_text(
        json.dumps(
            {"runs": {"x.c": [{"compilation": {"result": 0}, "runtime": {"result": 0}}]}}
        )
    )
    args = build_parser().parse_args(["compare", str(results_file), str(second)])

    assert await run(args) == 0

    output = json.loads(capsys.readouterr().out)
    assert output["languages"][0] == {
        "language": "C",
        "first": {"passed": 1, "total": 2},
        "second": {"passed": 1, "total": 1},
    }


async def test_unparseable_file_returns_error(
    tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    """Reports a readable error and exit code 1 for bad documents."""
    path = tmp_path / "broken.json"
    path.write_text("{not json")
    args = build_parser().parse_args(["summary", str(path)])

    with caplog.at_level(logging.ERROR):
        exit_code = await run(args)

    assert exit_code == 1
    assert "Could not parse results file" in caplog.text


async def test_missing_file_returns_error(
    tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    """Reports missing results files with exit code 1."""
    args = build_parser().parse_args(["summary", str(tmp_path / "nope.json")])

    with caplog.at_level(logging.ERROR):
        exit_code = await run(args)

    assert exit_code == 1
    assert "Results file not found" in caplog.text
