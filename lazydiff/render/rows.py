"""Text for individual list rows and pane headers."""

from __future__ import annotations

from collections.abc import Set

from ..git.types import CommitRecord
from ..highlight import sanitize_terminal_text
from ..list_model import VIEW_TREE, DirectoryRow, DisplayRow, FileRow, GroupRow
from ..tree_model import count_descendants
from ..ui_theme import UITheme, status_color

CHECK_ON = "[✓]"
CHECK_OFF = "[ ]"
EXPANDED_MARKER = "▼"
COLLAPSED_MARKER = "▶"
ACTIVE_MARKER = "●"
INACTIVE_MARKER = "○"


def _paint(color: str, text: str, theme: UITheme) -> str:
    if not color:
        return text
    return f"{color}{text}{theme.reset}"


def _indent(depth: int) -> str:
    return "  " * max(0, depth)


def format_group_row(row: GroupRow, theme: UITheme) -> str:
    return _paint(theme.group_header, f"{EXPANDED_MARKER} {row.label} ({row.count})", theme)


def format_directory_row(row: DirectoryRow, collapsed: Set[str], theme: UITheme) -> str:
    node = row.node
    label = _paint(theme.dir_name, f"{sanitize_terminal_text(node.name)}/", theme)
    if node.path in collapsed:
        hidden = count_descendants(node)
        return f"{_indent(node.depth)}{COLLAPSED_MARKER} {label} {_paint(theme.diff_dim, f'({hidden})', theme)}"
    return f"{_indent(node.depth)}{EXPANDED_MARKER} {label}"


def format_file_row(row: FileRow, selected: bool, view_mode: str, theme: UITheme) -> str:
    """``[✓] M  path`` in flat mode; indented basename in tree mode."""
    record = row.record
    check = _paint(theme.check_on, CHECK_ON, theme) if selected else _paint(theme.check_off, CHECK_OFF, theme)
    status = _paint(status_color(theme, record.status), record.status.ljust(2), theme)
    if view_mode == VIEW_TREE and row.node is not None:
        return f"{_indent(row.node.depth)}{check} {status} {sanitize_terminal_text(row.node.name)}"
    name = record.path
    if record.old_path:
        name = f"{record.old_path} -> {record.path}"
    return f"{check} {status} {sanitize_terminal_text(name)}"


def format_display_row(row: DisplayRow, selection: Set[str], collapsed: Set[str], view_mode: str, theme: UITheme) -> str:
    if isinstance(row, GroupRow):
        return format_group_row(row, theme)
    if isinstance(row, DirectoryRow):
        return format_directory_row(row, collapsed, theme)
    if isinstance(row, FileRow):
        return format_file_row(row, row.path in selection, view_mode, theme)
    raise TypeError(f"unknown row type: {type(row).__name__}")


def format_commit_row(commit: CommitRecord, focused: bool, selected: bool, theme: UITheme) -> str:
    marker = ">" if focused else " "
    check = _paint(theme.check_on, CHECK_ON, theme) if selected else _paint(theme.check_off, CHECK_OFF, theme)
    hash_text = _paint(theme.commit_hash, sanitize_terminal_text(commit.hash), theme)
    message = _paint(theme.commit_message, sanitize_terminal_text(commit.message), theme)
    return f"{marker}{check} {hash_text} {message}"


def pane_header(title: str, active: bool, theme: UITheme, detail: str = "", selected_count: int = 0) -> str:
    """``Files ● (tree) [2 selected]`` style pane title."""
    marker = ACTIVE_MARKER if active else INACTIVE_MARKER
    color = theme.pane_title_active if active else theme.pane_title_inactive
    parts = [_paint(color, f"{title} {marker}", theme)]
    if detail:
        parts.append(detail)
    if selected_count:
        parts.append(_paint(theme.selected_count, f"[{selected_count} selected]", theme))
    return " ".join(parts)


def view_mode_label(view_mode: str) -> str:
    return f"({view_mode})"
