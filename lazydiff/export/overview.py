"""Repository file overview: every non-ignored file grouped by directory."""

from __future__ import annotations

import posixpath
from collections.abc import Iterable
from pathlib import Path


def format_file_size(size: int) -> str:
    if size < 1024:
        return f"{size} B"
    if size < 1024 * 1024:
        return f"{size / 1024:.2f} KB"
    if size < 1024 * 1024 * 1024:
        return f"{size / (1024 * 1024):.2f} MB"
    return f"{size / (1024 * 1024 * 1024):.2f} GB"


def _file_size(path: Path) -> int:
    try:
        return path.stat().st_size
    except OSError:
        return 0


def build_overview(files: Iterable[str], root: Path) -> str:
    """Render the overview text for repo-relative ``files`` under ``root``.

    Directories are sorted; each starts with a ``[dir]`` header (``[.]`` for the
    root) followed by ``  - name (size)`` lines and a blank line.
    """
    grouped: dict[str, list[tuple[str, int]]] = {}
    for rel_path in files:
        directory = posixpath.dirname(rel_path) or "."
        name = posixpath.basename(rel_path)
        grouped.setdefault(directory, []).append((name, _file_size(root / rel_path)))

    out: list[str] = []
    for directory in sorted(grouped):
        out.append(f"[{directory}]\n")
        for name, size in sorted(grouped[directory]):
            out.append(f"  - {name} ({format_file_size(size)})\n")
        out.append("\n")
    return "".join(out)
