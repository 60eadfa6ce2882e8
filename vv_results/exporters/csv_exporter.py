"""CSV exporter: one row per test."""

import csv
from dataclasses import dataclass
from typing import TextIO

from vv_results.exporters.base import ReportExporter
from vv_results.report import Report, View
from vv_results.serialization import VERDICT_COLUMNS, verdict_payload


@dataclass(frozen=True, kw_only=True)
class CsvExporter(ReportExporter):
    """Exports per-test details as CSV."""

    suffix: str = ".csv"

    def export(self, report: Report, stream: TextIO, view: View = "all") -> None:
        """Write a header row followed by one row per selected test."""
        writer = csv.DictWriter(stream, fieldnames=list(VERDICT_COLUMNS))
        writer.writeheader()
        for verdict in report.view(view):
            writer.writerow(verdict_payload(verdict))


csv_exporter = CsvExporter()
