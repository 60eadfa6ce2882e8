"""Parsing of raw results text into a results document."""

import json
import logging
import re
from collections.abc import Mapping, Sequence
from typing import Any

from vv_results.models.run import ResultsDocument, RunRecord

log = logging.getLogger(__name__)

# legacy producers wrap the JSON as `var jsonResults = {...};`
ASSIGNMENT_PREFIX = re.compile(r"^var\s+[A-Za-z_$][\w$]*\s*=\s*")


class DocumentError(ValueError):
    """Raised when a results document cannot be parsed."""


def strip_assignment(text: str) -> str:
    """Remove an optional ``var name = ...;`` wrapper around the JSON body."""
    body = text.strip()
    match = ASSIGNMENT_PREFIX.match(body)
    if match is None:
        return body
    return body[match.end() :].rstrip().removesuffix(";").rstrip()


def _records(name: str, entry: Any) -> Sequence[RunRecord]:
    if isinstance(entry, Mapping):
        entry = [entry]
    elif not isinstance(entry, list):
        log.debug("Ignoring malformed run list for %s", name)
        return ()
    return tuple(RunRecord.from_raw(raw) for raw in entry)


def parse_document(text: str) -> ResultsDocument:
    """Parse raw results text.

    Args:
        text: File contents, optionally wrapped in a JavaScript assignment

    Returns:
        Document mapping each test name to its run records

    Raises:
        DocumentError: If the text is not JSON or has no ``runs`` object

    """
    try:
        data = json.loads(strip_assignment(text))
    except json.JSONDecodeError as e:
        raise DocumentError(f"Could not parse results file: {e}") from e

    if not isinstance(data, Mapping):
        raise DocumentError("Could not parse results file: top level is not an object")

    runs = data.get("runs")
    if not isinstance(runs, Mapping):
        raise DocumentError("Could not parse results file: missing 'runs' object")

    document = ResultsDocument(
        runs={str(name): _records(str(name), entry) for name, entry in runs.items()}
    )
    log.debug("Parsed results document with %d test(s)", len(document.runs))
    return document
