"""Export destination naming and resolution."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

SINGLE_EXPORT_NAME = "diff.txt"
CODE_DUMP_PREFIX = "code_dump"


def timestamp(now: datetime) -> str:
    return now.strftime("%Y%m%d_%H%M%S")


def timestamped_name(prefix: str, now: datetime) -> str:
    """Return ``<prefix>_YYYYMMDD_HHMMSS.txt``."""
    return f"{prefix}_{timestamp(now)}.txt"


def commit_file_name(hash: str, now: datetime) -> str:
    """Return ``diff_<hash>_YYYYMMDD_HHMMSS.txt``."""
    return f"diff_{hash}_{timestamp(now)}.txt"


def timestamped_dir_name(now: datetime, prefix: str = CODE_DUMP_PREFIX) -> str:
    return f"{prefix}_{timestamp(now)}"


def resolve_export_path(raw: str, base_dir: Path, default_name: str) -> Path:
    """Turn user input into a concrete file path and create its parent.

    Empty input means ``default_name`` in ``base_dir``. Relative input is taken
    against ``base_dir``. A destination that is an existing directory, or that
    does not exist and has no suffix, is treated as a directory and receives
    ``default_name``.
    """
    text = raw.strip()
    target = Path(text).expanduser() if text else Path(default_name)
    if not target.is_absolute():
        target = base_dir / target
    if target.is_dir() or (not target.exists() and target.suffix == ""):
        target = target / default_name
    target.parent.mkdir(parents=True, exist_ok=True)
    return target


def resolve_dump_dir(raw: str, base_dir: Path, now: datetime) -> Path:
    """Create and return ``<base>/code_dump_YYYYMMDD_HHMMSS``; empty input means ``base_dir``."""
    text = raw.strip()
    base = Path(text).expanduser() if text else base_dir
    if not base.is_absolute():
        base = base_dir / base
    target = base / timestamped_dir_name(now)
    target.mkdir(parents=True, exist_ok=True)
    return target


def display_path(path: Path, base_dir: Path) -> str:
    """Show ``path`` relative to ``base_dir`` when it lives inside it."""
    try:
        return str(path.relative_to(base_dir))
    except ValueError:
        return str(path)
