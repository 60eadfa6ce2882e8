"""Loading of report exporters from entry points."""

from importlib.metadata import entry_points

from vv_results.exporters.base import ReportExporter

ENTRY_POINT_GROUP = "vv_results.exporters"


class ExporterNotFoundError(Exception):
    """Raised when an exporter is not found."""


def available_exporters() -> list[str]:
    """Return the keys of all registered exporters."""
    return sorted(entry.name for entry in entry_points(group=ENTRY_POINT_GROUP))


def load_exporter(key: str) -> ReportExporter:
    """Load an exporter by key.

    Args:
        key: The exporter key as registered in pyproject.toml (e.g., "csv")

    Returns:
        The exporter instance

    Raises:
        ExporterNotFoundError: If no exporter with the given key is found

    """
    entries = entry_points(group=ENTRY_POINT_GROUP)

    for entry in entries:
        if entry.name == key:
            exporter: ReportExporter = entry.load()
            return exporter

    available = [e.name for e in entries]
    raise ExporterNotFoundError(
        f"Exporter '{key}' not found. Available exporters: {available}"
    )
