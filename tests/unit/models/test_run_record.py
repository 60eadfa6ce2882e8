"""Tests for run record ingestion and result resolution."""

import pytest

from vv_results.models.run import (
    FlagResult,
    LabelResult,
    MissingResult,
    NumericResult,
    PhaseSection,
    RunRecord,
    resolve_result_code,
)


@pytest.mark.parametrize(
    ("section", "expected"),
    [
        ({"result": 0}, NumericResult(code=0)),
        ({"result": 2}, NumericResult(code=2)),
        ({"result": "3"}, NumericResult(code=3)),
        ({"result": " 0 "}, NumericResult(code=0)),
        ({"result": 1.0}, NumericResult(code=1)),
        ({"result": "Runtime Failure"}, LabelResult(label="Runtime Failure")),
        ({"return_code": 4}, NumericResult(code=4)),
        ({"success": True}, FlagResult(success=True)),
        ({"success": False}, FlagResult(success=False)),
        ({"result": True}, FlagResult(success=True)),
        ({}, MissingResult()),
        ({"result": None, "success": None}, MissingResult()),
        ({"result": ""}, MissingResult()),
    ],
)
def test_resolve_result_code(section: dict[str, object], expected: object) -> None:
    """Resolves result fields through the fallback chain."""
    assert resolve_result_code(section) == expected


def test_result_field_wins_over_return_code_and_flag() -> None:
    """Explicit result takes precedence over later fallbacks."""
    section = {"result": 5, "return_code": 0, "success": True}

    assert resolve_result_code(section) == NumericResult(code=5)


def test_return_code_wins_over_flag() -> None:
    """return_code takes precedence over the success flag."""
    assert resolve_result_code({"return_code": 0, "success": False}) == NumericResult(
        code=0
    )


def test_compilation_section_keeps_stdout_and_output_apart() -> None:
    """Compile phase reads stderr from errors and keeps both output streams."""
    section = PhaseSection.from_raw(
        {"result": 1, "errors": "bad", "stdout": "Compiling foo.c", "output": "log"}
    )

    assert section.stderr == "bad"
    assert section.stdout == "Compiling foo.c"
    assert section.output == "log"


def test_blank_errors_field_falls_back_to_stderr() -> None:
    """A whitespace-only errors field does not hide stderr."""
    section = PhaseSection.from_raw(
        {"result": 1, "errors": "  \n", "stderr": "error: real problem"}
    )

    assert section.stderr == "error: real problem"


def test_runtime_section_keeps_output_separate() -> None:
    """Run phase keeps output as its own text source."""
    section = PhaseSection.from_raw(
        {"result": 1, "stderr": "err", "stdout": "out", "output": "aux"}
    )

    assert section.stderr == "err"
    assert section.stdout == "out"
    assert section.output == "aux"


def test_run_record_reads_execution_alias() -> None:
    """Uses the execution key when runtime is absent."""
    record = RunRecord.from_raw({"execution": {"result": 0}})

    assert record.runtime is not None
    assert record.runtime.result == NumericResult(code=0)
    assert record.compilation is None


def test_run_record_prefers_runtime_over_execution() -> None:
    """Runtime key is preferred over execution."""
    record = RunRecord.from_raw(
        {"runtime": {"result": 0}, "execution": {"result": 1}}
    )

    assert record.runtime is not None
    assert record.runtime.result == NumericResult(code=0)


@pytest.mark.parametrize("raw", [None, [], "text", 3])
def test_run_record_from_malformed_input(raw: object) -> None:
    """Malformed records produce a record with no phases."""
    record = RunRecord.from_raw(raw)

    assert record.compilation is None
    assert record.runtime is None


def test_run_record_ignores_non_mapping_sections() -> None:
    """Phase keys that do not hold objects are ignored."""
    record = RunRecord.from_raw({"compilation": "ok", "runtime": [1]})

    assert record.section("compilation") is None
    assert record.section("runtime") is None
