"""Classification of every test in a results document."""

import logging
from collections.abc import Iterable, Mapping, Sequence

from vv_results.config import EngineConfig, StderrPolicy
from vv_results.models.run import Phase, ResultsDocument, RunRecord
from vv_results.models.verdict import Language, PhaseStatus, Verdict
from vv_results.status import extract_status, missing_status

log = logging.getLogger(__name__)

EXTENSION_LANGUAGES: Mapping[str, Language] = {
    "c": "C",
    "cpp": "C++",
    "f90": "Fortran",
}
LANGUAGES: Sequence[Language] = ("C", "C++", "Fortran")

# sort order; representative selection walks it backwards
LANGUAGE_PRIORITY: Mapping[Language | None, int] = {
    "C": 0,
    "C++": 1,
    "Fortran": 2,
    None: 3,
}


def split_name(test_name: str) -> tuple[str, str]:
    """Split a test name into base name and extension at the last dot."""
    base, dot, extension = test_name.rpartition(".")
    if not dot:
        return test_name, ""
    return base, extension


def language_for(test_name: str) -> Language | None:
    """Return the source language implied by the test name's extension."""
    return EXTENSION_LANGUAGES.get(split_name(test_name)[1].lower())


def sort_key(test_name: str) -> tuple[str, int, str]:
    """Order by base name, then C < C++ < Fortran < anything else."""
    return (
        split_name(test_name)[0],
        LANGUAGE_PRIORITY[language_for(test_name)],
        test_name,
    )


def fold_phase(
    runs: Sequence[RunRecord], phase: Phase, stderr_policy: StderrPolicy
) -> PhaseStatus:
    """Fold one phase across all runs.

    The first determinate failure wins, then the first pass. Runs with no
    result for the phase only count if no run has one.
    """
    statuses = [extract_status(run, phase, stderr_policy) for run in runs]
    evaluated = [s for s in statuses if s.evaluated]
    if not evaluated:
        return missing_status(phase)
    return next((s for s in evaluated if not s.passed), evaluated[0])


def classify_test(
    test_name: str,
    runs: Sequence[RunRecord],
    stderr_policy: StderrPolicy = "ignore",
) -> Verdict:
    """Build the verdict for one test from all of its runs."""
    compiler = fold_phase(runs, "compilation", stderr_policy)
    runtime = (
        fold_phase(runs, "runtime", stderr_policy)
        if compiler.passed
        else missing_status("runtime")
    )
    return Verdict(
        name=test_name,
        language=language_for(test_name),
        compiler=compiler,
        runtime=runtime,
    )


def select_representatives(verdicts: Iterable[Verdict]) -> Sequence[Verdict]:
    """Keep one verdict per base name, preferring Fortran, then C++, then C."""
    chosen: dict[str, Verdict] = {}
    for verdict in verdicts:
        base = split_name(verdict.name)[0]
        current = chosen.get(base)
        if current is None or _preferred(verdict, current):
            chosen[base] = verdict
    return [chosen[base] for base in sorted(chosen)]


def _preferred(candidate: Verdict, current: Verdict) -> bool:
    # unrecognized extensions never displace a known language
    if candidate.language is None:
        return False
    if current.language is None:
        return True
    return LANGUAGE_PRIORITY[candidate.language] > LANGUAGE_PRIORITY[current.language]


def classify(
    document: ResultsDocument, config: EngineConfig | None = None
) -> Sequence[Verdict]:
    """Classify every test of a document.

    Args:
        document: Parsed results document
        config: Engine options; defaults apply when omitted

    Returns:
        Verdicts ordered by base name, then language

    """
    config = config or EngineConfig()
    verdicts = [
        classify_test(name, document.runs[name], config.stderr_policy)
        for name in sorted(document.runs, key=sort_key)
    ]

    unrecognized = sum(1 for verdict in verdicts if verdict.language is None)
    if unrecognized:
        log.debug("%d test(s) have an unrecognized extension", unrecognized)

    if config.selection == "representative":
        return select_representatives(verdicts)
    return verdicts
