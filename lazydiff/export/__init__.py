"""Export kinds: single/multi file diffs, commits, overview, and code dump."""

from .orchestrator import ExportOrchestrator, ExportResult
from .paths import commit_file_name, resolve_export_path, timestamped_name

__all__ = [
    "ExportOrchestrator",
    "ExportResult",
    "commit_file_name",
    "resolve_export_path",
    "timestamped_name",
]
