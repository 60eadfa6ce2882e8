"""Models for per-test verdicts."""

from dataclasses import dataclass
from typing import Literal

from typing_extensions import TypeAliasType

Language = TypeAliasType("Language", Literal["C", "C++", "Fortran"])
Mode = TypeAliasType("Mode", Literal["compiler", "full"])

PASS_CODE = 0
NO_COMPILATION_CODE = -1
UNKNOWN_RUNTIME = "Unknown"

PASS_REASON = "Pass"
NO_COMPILATION_REASON = "No compilation result"
NO_EXECUTION_REASON = "No execution result"


@dataclass(frozen=True, kw_only=True)
class PhaseStatus:
    """Normalized outcome of one phase of one run."""

    result: int | str
    reason: str
    stderr: str = ""
    stdout: str = ""
    output: str = ""
    passed: bool = False
    evaluated: bool = True


@dataclass(frozen=True, kw_only=True)
class Verdict:
    """Normalized pass/fail judgment for one test."""

    name: str
    language: Language | None
    compiler: PhaseStatus
    runtime: PhaseStatus

    @property
    def compiler_result(self) -> int:
        """Compile phase result code."""
        return int(self.compiler.result)

    @property
    def compiler_reason(self) -> str:
        """Compile phase reason."""
        return self.compiler.reason

    @property
    def runtime_result(self) -> int | str:
        """Run phase result: a code, a producer label or ``"Unknown"``."""
        return self.runtime.result

    @property
    def runtime_reason(self) -> str:
        """Run phase reason."""
        return self.runtime.reason

    def outcome(self, mode: Mode) -> bool | None:
        """Return whether the test passed under ``mode``.

        ``None`` means the test does not count in that mode: in full mode a
        test whose build failed, or whose run produced no result, is neither
        a pass nor a fail.
        """
        if mode == "compiler":
            return self.compiler.passed
        if not self.compiler.passed or not self.runtime.evaluated:
            return None
        return self.runtime.passed

    def reason(self, mode: Mode) -> str:
        """Return the reason that explains the outcome under ``mode``."""
        return self.compiler.reason if mode == "compiler" else self.runtime.reason
