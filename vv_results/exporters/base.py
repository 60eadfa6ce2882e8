"""Abstract base class for report exporters."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TextIO

from vv_results.report import Report, View


@dataclass(frozen=True, kw_only=True)
class ReportExporter(ABC):
    """Writes a report to a text stream in a tabular format."""

    suffix: str

    @abstractmethod
    def export(self, report: Report, stream: TextIO, view: View = "all") -> None:
        """Write the verdicts selected by ``view`` to ``stream``.

        Args:
            report: Report to export
            stream: Open text stream to write to
            view: Detail view selecting which tests become rows

        """
