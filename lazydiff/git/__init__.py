"""Git boundary: change/commit records, porcelain parsing, and the service."""

from .porcelain import is_staged, is_unstaged, parse_log, parse_porcelain_z
from .service import GitService
from .types import ChangeRecord, CommitRecord, ExportEntry

__all__ = [
    "ChangeRecord",
    "CommitRecord",
    "ExportEntry",
    "GitService",
    "is_staged",
    "is_unstaged",
    "parse_log",
    "parse_porcelain_z",
]
