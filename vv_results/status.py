"""Status extraction for one phase of one run record."""

from vv_results.config import StderrPolicy
from vv_results.models.run import (
    FlagResult,
    LabelResult,
    MissingResult,
    NumericResult,
    Phase,
    PhaseSection,
    ResultCode,
    RunRecord,
)
from vv_results.models.verdict import (
    NO_COMPILATION_CODE,
    NO_COMPILATION_REASON,
    NO_EXECUTION_REASON,
    PASS_CODE,
    PASS_REASON,
    UNKNOWN_RUNTIME,
    PhaseStatus,
)
from vv_results.reason import extract_reason

# a compile result is always an int, so a producer label counts as a failure code
COMPILATION_LABEL_CODE = 1


def missing_status(phase: Phase) -> PhaseStatus:
    """Return the sentinel status for a phase with no result."""
    if phase == "compilation":
        return PhaseStatus(
            result=NO_COMPILATION_CODE,
            reason=NO_COMPILATION_REASON,
            evaluated=False,
        )
    return PhaseStatus(
        result=UNKNOWN_RUNTIME,
        reason=NO_EXECUTION_REASON,
        evaluated=False,
    )


def result_value(phase: Phase, code: ResultCode) -> int | str | None:
    """Map a resolved result variant to the reported result value.

    Returns None when the variant carries no result.
    """
    match code:
        case NumericResult(code=value):
            return value
        case FlagResult(success=success):
            return PASS_CODE if success else 1
        case LabelResult(label=label):
            return COMPILATION_LABEL_CODE if phase == "compilation" else label
        case MissingResult():
            return None


def extract_status(
    run: RunRecord,
    phase: Phase,
    stderr_policy: StderrPolicy = "ignore",
) -> PhaseStatus:
    """Determine the result code and reason of ``phase`` for one run.

    Args:
        run: Run record to inspect
        phase: Which phase to report on
        stderr_policy: ``"ignore"`` reports a pass code as a pass whatever
            stderr holds; ``"fail"`` treats non-empty stderr, and run
            output, as failure

    Returns:
        Status with result, reason and the phase's raw text

    """
    section = run.section(phase)
    if section is None:
        return missing_status(phase)

    result = result_value(phase, section.result)
    if result is None:
        return missing_status(phase)

    passed = result == PASS_CODE and not (
        stderr_policy == "fail" and failure_signal(phase, section)
    )
    return PhaseStatus(
        result=result,
        reason=PASS_REASON if passed else failure_reason(section),
        stderr=section.stderr,
        stdout=section.stdout,
        output=section.output,
        passed=passed,
    )


def failure_signal(phase: Phase, section: PhaseSection) -> bool:
    """Whether the section carries text that fails a reported pass.

    Stderr counts for both phases; the run phase also counts its output.
    """
    if section.stderr.strip():
        return True
    return phase == "runtime" and bool(section.output.strip())


def failure_reason(section: PhaseSection) -> str:
    """Derive a reason from the section's text streams."""
    return extract_reason(
        stdout=section.stdout, stderr=section.stderr, output=section.output
    )
