"""Models for raw run records, normalized once at ingestion.

Result documents have drifted across producer versions: the same outcome may be
spelled as ``result``, ``return_code`` or a ``success`` flag, and the text
streams as ``errors``/``stderr``/``stdout``/``output``. Each phase section is
resolved here into a tagged result variant so that nothing downstream has to
probe field names again.
"""

from collections.abc import Mapping, Sequence
from typing import Annotated, Any, Literal

from pydantic import Field
from typing_extensions import TypeAliasType

from vv_results.models.base import Model

Phase = TypeAliasType("Phase", Literal["compilation", "runtime"])

PHASE_KEYS: Mapping[Phase, Sequence[str]] = {
    "compilation": ("compilation",),
    "runtime": ("runtime", "execution"),
}
RESULT_KEYS = ("result", "return_code")
FLAG_KEYS = ("success",)
STDERR_KEYS = ("errors", "stderr")


class NumericResult(Model):
    """Integer result code reported by the producer."""

    kind: Literal["numeric"] = "numeric"
    code: int


class LabelResult(Model):
    """Descriptive result label, e.g. ``"Runtime Failure"``."""

    kind: Literal["label"] = "label"
    label: str


class FlagResult(Model):
    """Boolean success flag."""

    kind: Literal["flag"] = "flag"
    success: bool


class MissingResult(Model):
    """No usable result field was present."""

    kind: Literal["missing"] = "missing"


ResultCode = Annotated[
    NumericResult | LabelResult | FlagResult | MissingResult,
    Field(discriminator="kind"),
]


def resolve_result_code(section: Mapping[str, Any]) -> ResultCode:
    """Resolve the result of a phase section through the fallback chain.

    Order: an explicit result field (``result`` then ``return_code``), where a
    numeric string is coerced to an int and any other string is kept as a
    label; then the ``success`` flag; otherwise a missing result.
    """
    for key in RESULT_KEYS:
        value = section.get(key)
        if value is None:
            continue
        if isinstance(value, bool):
            return FlagResult(success=value)
        if isinstance(value, int):
            return NumericResult(code=value)
        if isinstance(value, float) and value.is_integer():
            return NumericResult(code=int(value))
        if isinstance(value, str) and value.strip():
            text = value.strip()
            try:
                return NumericResult(code=int(text))
            except ValueError:
                return LabelResult(label=text)

    for key in FLAG_KEYS:
        value = section.get(key)
        if isinstance(value, bool):
            return FlagResult(success=value)

    return MissingResult()


def _text(section: Mapping[str, Any], *keys: str) -> str:
    """Return the first non-empty string stored under any of ``keys``."""
    for key in keys:
        value = section.get(key)
        if isinstance(value, str) and value.strip():
            return value
    return ""


class PhaseSection(Model):
    """One phase (compile or run) of a run record."""

    result: ResultCode = Field(default_factory=MissingResult)
    stdout: str = ""
    stderr: str = ""
    output: str = ""

    @classmethod
    def from_raw(cls, raw: Mapping[str, Any]) -> "PhaseSection":
        """Build a section from its raw mapping."""
        return cls(
            result=resolve_result_code(raw),
            stdout=_text(raw, "stdout"),
            stderr=_text(raw, *STDERR_KEYS),
            output=_text(raw, "output"),
        )


class RunRecord(Model):
    """One recorded attempt (compile and optionally execute) of a test."""

    compilation: PhaseSection | None = None
    runtime: PhaseSection | None = None

    @classmethod
    def from_raw(cls, raw: Any) -> "RunRecord":
        """Build a record from raw JSON, tolerating any shape.

        Anything that is not a mapping yields a record with no phases.
        """
        if not isinstance(raw, Mapping):
            return cls()

        sections: dict[str, PhaseSection | None] = {}
        for phase, keys in PHASE_KEYS.items():
            sections[phase] = None
            for key in keys:
                value = raw.get(key)
                if isinstance(value, Mapping):
                    sections[phase] = PhaseSection.from_raw(value)
                    break
        return cls(**sections)

    def section(self, phase: Phase) -> PhaseSection | None:
        """Return the section for ``phase`` if the record has one."""
        return self.compilation if phase == "compilation" else self.runtime


class ResultsDocument(Model):
    """Parsed results document: test name to its ordered run records."""

    runs: Mapping[str, Sequence[RunRecord]] = Field(default_factory=dict)
