"""Models for aggregated results."""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass

from vv_results.models.verdict import Language, Mode


@dataclass(frozen=True, kw_only=True)
class LanguageTotals:
    """Pass and fail counts for one language."""

    passed: int = 0
    failed: int = 0

    @property
    def total(self) -> int:
        """Number of counted tests."""
        return self.passed + self.failed


@dataclass(frozen=True, kw_only=True)
class FailureEntry:
    """A failing test and the reason it failed."""

    name: str
    reason: str


@dataclass(frozen=True, kw_only=True)
class Summary:
    """Per-language totals and the failure list under one counting mode."""

    mode: Mode
    languages: Mapping[Language, LanguageTotals]
    failures: Sequence[FailureEntry]

    @property
    def passed(self) -> int:
        """Passing tests across all languages."""
        return sum(totals.passed for totals in self.languages.values())

    @property
    def failed(self) -> int:
        """Failing tests across all languages."""
        return sum(totals.failed for totals in self.languages.values())

    @property
    def total(self) -> int:
        """Counted tests across all languages."""
        return self.passed + self.failed


@dataclass(frozen=True, kw_only=True)
class LanguageComparison:
    """Side-by-side pass counts of one language across two documents."""

    language: Language
    first_passed: int
    second_passed: int
    first_total: int
    second_total: int


@dataclass(frozen=True, kw_only=True)
class ComparisonResult:
    """Per-language comparison of two independently summarized documents."""

    mode: Mode
    rows: Sequence[LanguageComparison]
