"""Aggregation of verdicts into per-language summaries and comparisons."""

import logging
from collections.abc import Sequence

from vv_results.classifier import LANGUAGES
from vv_results.models.summary import (
    ComparisonResult,
    FailureEntry,
    LanguageComparison,
    LanguageTotals,
    Summary,
)
from vv_results.models.verdict import Language, Mode, Verdict

log = logging.getLogger(__name__)


def summarize(verdicts: Sequence[Verdict], mode: Mode = "full") -> Summary:
    """Fold verdicts into per-language totals and a failure list.

    Tests without a recognized language are left out entirely. In full mode,
    tests whose build failed or that produced no execution result are left
    out as well, so totals can differ between modes.

    Args:
        verdicts: Verdicts in classifier order
        mode: ``"compiler"`` counts build results only, ``"full"`` counts
            build and run together

    Returns:
        Summary with all known languages present, zero-filled

    """
    passed: dict[Language, int] = dict.fromkeys(LANGUAGES, 0)
    failed: dict[Language, int] = dict.fromkeys(LANGUAGES, 0)
    failures: list[FailureEntry] = []
    skipped = 0

    for verdict in verdicts:
        if verdict.language is None:
            continue
        outcome = verdict.outcome(mode)
        if outcome is None:
            skipped += 1
        elif outcome:
            passed[verdict.language] += 1
        else:
            failed[verdict.language] += 1
            failures.append(FailureEntry(name=verdict.name, reason=verdict.reason(mode)))

    if skipped:
        log.debug("%d test(s) not counted in %s mode", skipped, mode)

    return Summary(
        mode=mode,
        languages={
            language: LanguageTotals(passed=passed[language], failed=failed[language])
            for language in LANGUAGES
        },
        failures=failures,
    )


def compare(
    first: Sequence[Verdict],
    second: Sequence[Verdict],
    mode: Mode = "full",
) -> ComparisonResult:
    """Summarize two documents independently and pair pass counts per language.

    No test identities are matched across the two documents.
    """
    first_summary = summarize(first, mode)
    second_summary = summarize(second, mode)
    return ComparisonResult(
        mode=mode,
        rows=[
            LanguageComparison(
                language=language,
                first_passed=first_summary.languages[language].passed,
                second_passed=second_summary.languages[language].passed,
                first_total=first_summary.languages[language].total,
                second_total=second_summary.languages[language].total,
            )
            for language in LANGUAGES
        ],
    )
