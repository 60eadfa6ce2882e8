"""Conversion of engine results into JSON-ready structures."""

from typing import Any

from vv_results.models.summary import ComparisonResult, Summary
from vv_results.models.verdict import Verdict

OTHER_LANGUAGE = "Other"

VERDICT_COLUMNS = (
    "name",
    "language",
    "compiler_result",
    "compiler_reason",
    "runtime_result",
    "runtime_reason",
    "compiler_stdout",
    "compiler_stderr",
    "compiler_output",
    "runtime_stdout",
    "runtime_stderr",
    "runtime_output",
)


def verdict_payload(verdict: Verdict) -> dict[str, Any]:
    """Flatten a verdict into one row keyed by ``VERDICT_COLUMNS``."""
    return {
        "name": verdict.name,
        "language": verdict.language or OTHER_LANGUAGE,
        "compiler_result": verdict.compiler_result,
        "compiler_reason": verdict.compiler_reason,
        "runtime_result": verdict.runtime_result,
        "runtime_reason": verdict.runtime_reason,
        "compiler_stdout": verdict.compiler.stdout,
        "compiler_stderr": verdict.compiler.stderr,
        "compiler_output": verdict.compiler.output,
        "runtime_stdout": verdict.runtime.stdout,
        "runtime_stderr": verdict.runtime.stderr,
        "runtime_output": verdict.runtime.output,
    }


def summary_payload(summary: Summary) -> dict[str, Any]:
    """Format a summary for JSON output."""
    return {
        "mode": summary.mode,
        "total": summary.total,
        "passed": summary.passed,
        "failed": summary.failed,
        "languages": {
            language: {
                "total": totals.total,
                "passed": totals.passed,
                "failed": totals.failed,
            }
            for language, totals in summary.languages.items()
        },
        "failures": [
            {"name": failure.name, "reason": failure.reason}
            for failure in summary.failures
        ],
    }


def comparison_payload(comparison: ComparisonResult) -> dict[str, Any]:
    """Format a comparison for JSON output."""
    return {
        "mode": comparison.mode,
        "languages": [
            {
                "language": row.language,
                "first": {"passed": row.first_passed, "total": row.first_total},
                "second": {"passed": row.second_passed, "total": row.second_total},
            }
            for row in comparison.rows
        ],
    }
