"""Best-effort extraction of a failure reason from noisy tool output."""

import re
from collections.abc import Sequence

DIAGNOSTIC_PATTERN = re.compile(
    r"error|compilation aborted|undefined|invalid|fatal|segmentation"
    r"|core dumped|not found|missing",
    re.IGNORECASE,
)
FALLBACK_LINES = 3
SEPARATOR = " | "
UNKNOWN_REASON = "Unknown"


def significant_lines(*texts: str | None) -> Sequence[str]:
    """Split texts into stripped, non-blank lines, preserving order."""
    lines: list[str] = []
    for text in texts:
        if not text:
            continue
        lines.extend(line.strip() for line in text.splitlines() if line.strip())
    return lines


def extract_reason(
    stdout: str | None = None,
    stderr: str | None = None,
    output: str | None = None,
) -> str:
    """Pick the most diagnostic line out of a phase's text streams.

    Sources are scanned in priority order stderr, stdout, output. The first
    line matching a diagnostic keyword is returned verbatim; otherwise the
    first few lines are joined. Never raises: no text at all yields
    ``"Unknown"``.

    Args:
        stdout: Standard output of the phase
        stderr: Standard error of the phase
        output: Auxiliary output captured by the producer

    Returns:
        A single-line reason string

    """
    lines = significant_lines(stderr, stdout, output)
    if not lines:
        return UNKNOWN_REASON

    for line in lines:
        if DIAGNOSTIC_PATTERN.search(line):
            return line

    return SEPARATOR.join(lines[:FALLBACK_LINES])
