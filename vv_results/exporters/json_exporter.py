"""JSON exporter: summary plus per-test details."""

import json
from dataclasses import dataclass
from typing import TextIO

from vv_results.exporters.base import ReportExporter
from vv_results.report import Report, View
from vv_results.serialization import summary_payload, verdict_payload


@dataclass(frozen=True, kw_only=True)
class JsonExporter(ReportExporter):
    """Exports the summary and selected tests as one JSON object."""

    suffix: str = ".json"
    indent: int | None = 2

    def export(self, report: Report, stream: TextIO, view: View = "all") -> None:
        """Write ``{"source", "summary", "tests"}``."""
        payload = {
            "source": report.source,
            "summary": summary_payload(report.summary),
            "tests": [verdict_payload(verdict) for verdict in report.view(view)],
        }
        json.dump(payload, stream, indent=self.indent)
        stream.write("\n")


json_exporter = JsonExporter()
