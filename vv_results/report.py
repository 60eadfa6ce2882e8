"""Building reports from raw sources, singly or as a comparison pair."""

import asyncio
import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Literal

import aiohttp
from typing_extensions import TypeAliasType

from vv_results.aggregator import compare, summarize
from vv_results.classifier import classify
from vv_results.config import EngineConfig
from vv_results.document import parse_document
from vv_results.models.summary import ComparisonResult, Summary
from vv_results.models.verdict import Verdict
from vv_results.sources import is_url, load_source

log = logging.getLogger(__name__)

View = TypeAliasType("View", Literal["all", "pass", "fail", "compiler-failures", "runtime-failures"])


@dataclass(frozen=True, kw_only=True)
class Report:
    """Verdicts and summary for one results document."""

    source: str
    verdicts: Sequence[Verdict]
    summary: Summary

    def view(self, view: View = "all") -> Sequence[Verdict]:
        """Return the verdicts shown by a detail view.

        ``pass`` keeps tests that built and ran cleanly, ``fail`` everything
        else. ``runtime-failures`` lists built tests whose run did not pass,
        including those with no execution result.
        """
        match view:
            case "all":
                return list(self.verdicts)
            case "pass":
                return [v for v in self.verdicts if _fully_passed(v)]
            case "fail":
                return [v for v in self.verdicts if not _fully_passed(v)]
            case "compiler-failures":
                return [v for v in self.verdicts if not v.compiler.passed]
            case "runtime-failures":
                return [
                    v
                    for v in self.verdicts
                    if v.compiler.passed and not v.runtime.passed
                ]


def _fully_passed(verdict: Verdict) -> bool:
    return verdict.compiler.passed and verdict.runtime.passed


def build_report(source: str, text: str, config: EngineConfig | None = None) -> Report:
    """Parse, classify and summarize one raw results text.

    Raises:
        DocumentError: If the text is not a valid results document

    """
    config = config or EngineConfig()
    verdicts = classify(parse_document(text), config)
    summary = summarize(verdicts, config.mode)
    log.info(
        "Classified %d test(s) from %s: %d passed, %d failed (%s mode)",
        len(verdicts),
        source,
        summary.passed,
        summary.failed,
        config.mode,
    )
    return Report(source=source, verdicts=verdicts, summary=summary)


async def load_report(
    source: str,
    config: EngineConfig | None = None,
    session: aiohttp.ClientSession | None = None,
) -> Report:
    """Load a source and build its report."""
    text = await load_source(source, session)
    return build_report(source, text, config)


@dataclass(frozen=True, kw_only=True)
class Comparison:
    """Two independent reports and their side-by-side pass counts."""

    first: Report
    second: Report
    result: ComparisonResult


async def compare_sources(
    first: str, second: str, config: EngineConfig | None = None
) -> Comparison:
    """Load two sources concurrently and compare their per-language pass counts.

    The documents are classified independently; they need not share tests.
    """
    config = config or EngineConfig()

    if is_url(first) or is_url(second):
        async with aiohttp.ClientSession() as session:
            reports = await asyncio.gather(
                load_report(first, config, session),
                load_report(second, config, session),
            )
    else:
        reports = await asyncio.gather(
            load_report(first, config), load_report(second, config)
        )

    first_report, second_report = reports
    return Comparison(
        first=first_report,
        second=second_report,
        result=compare(first_report.verdicts, second_report.verdicts, config.mode),
    )
