"""CLI entry point for classifying validation suite results."""

import argparse
import asyncio
import json
import logging
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from vv_results.config import EngineConfig, load_config
from vv_results.document import DocumentError
from vv_results.exporters.loading import available_exporters, load_exporter
from vv_results.models.summary import ComparisonResult, Summary
from vv_results.report import Report, View, compare_sources, load_report
from vv_results.serialization import (
    comparison_payload,
    summary_payload,
    verdict_payload,
)
from vv_results.sources import SourceError

STATUS_SYMBOLS = {
    "pass": "✅",
    "fail": "❌",
}

VIEWS: Sequence[View] = (
    "all",
    "pass",
    "fail",
    "compiler-failures",
    "runtime-failures",
)


def log_summary(log: logging.Logger, source: str, summary: Summary) -> None:
    """Log a formatted per-language summary and the failing tests."""
    log.info("=" * 80)
    log.info("Results for %s (%s mode):", source, summary.mode)
    log.info("=" * 80)

    for language, totals in summary.languages.items():
        log.info(
            "%s: %d/%d passed, %d failed",
            language,
            totals.passed,
            totals.total,
            totals.failed,
        )

    log.info(
        "%s %d passed, %s %d failed",
        STATUS_SYMBOLS["pass"],
        summary.passed,
        STATUS_SYMBOLS["fail"],
        summary.failed,
    )
    for failure in summary.failures:
        log.info("  %s %s: %s", STATUS_SYMBOLS["fail"], failure.name, failure.reason)


def log_comparison(
    log: logging.Logger, first: str, second: str, comparison: ComparisonResult
) -> None:
    """Log side-by-side pass counts of two documents."""
    log.info("=" * 80)
    log.info("Comparison (%s mode): %s vs %s", comparison.mode, first, second)
    log.info("=" * 80)

    for row in comparison.rows:
        log.info(
            "%s: %d/%d vs %d/%d",
            row.language,
            row.first_passed,
            row.first_total,
            row.second_passed,
            row.second_total,
        )


async def resolve_config(args: argparse.Namespace) -> EngineConfig:
    """Load the config file, if any, and apply command-line overrides."""
    config = await load_config(args.config) if args.config else EngineConfig()
    return config.with_overrides(
        mode=args.mode,
        stderr_policy=args.stderr_policy,
        selection=args.selection,
    )


def format_details(report: Report, view: View) -> dict[str, Any]:
    """Format the tests of a detail view for JSON output."""
    tests = report.view(view)
    return {
        "source": report.source,
        "view": view,
        "total": len(tests),
        "tests": [verdict_payload(verdict) for verdict in tests],
    }


async def run_summary(args: argparse.Namespace) -> int:
    """Summarize one results file."""
    log = logging.getLogger("vv_results")
    config = await resolve_config(args)

    report = await load_report(args.source, config)
    log_summary(log, report.source, report.summary)

    print(json.dumps(summary_payload(report.summary), indent=2))
    return 0


async def run_details(args: argparse.Namespace) -> int:
    """Print or export per-test details of one results file."""
    log = logging.getLogger("vv_results")
    config = await resolve_config(args)

    report = await load_report(args.source, config)

    if args.format is None:
        print(json.dumps(format_details(report, args.filter), indent=2))
        return 0

    exporter = load_exporter(args.format)
    if args.output is None:
        exporter.export(report, sys.stdout, args.filter)
        return 0

    output = args.output
    if not output.suffix:
        output = output.with_suffix(exporter.suffix)
    with output.open("w", encoding="utf-8", newline="") as stream:
        exporter.export(report, stream, args.filter)
    log.info("Exported %s view of %s to %s", args.filter, report.source, output)
    return 0


async def run_compare(args: argparse.Namespace) -> int:
    """Compare per-language pass counts of two results files."""
    log = logging.getLogger("vv_results")
    config = await resolve_config(args)

    comparison = await compare_sources(args.first, args.second, config)
    log_comparison(log, args.first, args.second, comparison.result)

    print(json.dumps(comparison_payload(comparison.result), indent=2))
    return 0


async def run(args: argparse.Namespace) -> int:
    """Dispatch to the selected command and return exit code."""
    log = logging.getLogger("vv_results")
    try:
        return int(await args.handler(args))
    except (DocumentError, SourceError, FileNotFoundError, ValueError) as e:
        log.error("%s", e)
        return 1


def add_engine_arguments(parser: argparse.ArgumentParser) -> None:
    """Add the options shared by every command."""
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="YAML file with engine options",
    )
    parser.add_argument(
        "--mode",
        choices=("compiler", "full"),
        default=None,
        help="Count build results only, or build and run together",
    )
    parser.add_argument(
        "--stderr-policy",
        choices=("ignore", "fail"),
        default=None,
        help="Whether stderr output fails a phase that reported success",
    )
    parser.add_argument(
        "--selection",
        choices=("all", "representative"),
        default=None,
        help="Report every test or one per base name (Fortran > C++ > C)",
    )


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        description="Classify compiler validation suite results"
    )
    commands = parser.add_subparsers(dest="command", required=True)

    summary = commands.add_parser("summary", help="Per-language pass/fail totals")
    summary.add_argument("source", help="Results file path or URL")
    add_engine_arguments(summary)
    summary.set_defaults(handler=run_summary)

    details = commands.add_parser("details", help="Per-test verdicts and reasons")
    details.add_argument("source", help="Results file path or URL")
    details.add_argument(
        "--filter",
        choices=VIEWS,
        default="all",
        help="Which tests to include",
    )
    details.add_argument(
        "--format",
        choices=available_exporters(),
        default=None,
        help="Export format (JSON details on stdout when omitted)",
    )
    details.add_argument(
        "--output",
        type=Path,
        default=None,
        help="File to write the export to (stdout when omitted)",
    )
    add_engine_arguments(details)
    details.set_defaults(handler=run_details)

    compare = commands.add_parser("compare", help="Compare two results files")
    compare.add_argument("first", help="First results file path or URL")
    compare.add_argument("second", help="Second results file path or URL")
    add_engine_arguments(compare)
    compare.set_defaults(handler=run_compare)

    return parser


def main(argv: Sequence[str] | None = None) -> None:
    """CLI entry point."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    sys.exit(asyncio.run(run(args)))


if __name__ == "__main__":  # pragma: no cover
    main()
