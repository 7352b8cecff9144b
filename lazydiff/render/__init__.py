"""Rendering engine for the dashboard.

Composes full ANSI frames from ``BrowserState`` without mutating it: the left
column holds the files and commits panes, the right column the diff, and the
bottom row the status line. Path entry modes replace the frame with a modal.
"""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass

from ..ansi import clip_ansi_line, fit_ansi_cell
from ..highlight import sanitize_terminal_text
from ..layout import DashboardLayout
from ..list_model import live_selection
from ..state import PANE_COMMITS, PANE_FILES, BrowserState
from ..ui_theme import UITheme
from .modal import build_export_modal
from .rows import format_commit_row, format_display_row, pane_header, view_mode_label

FOOTER_HINT = "↑↓:Nav Space:Select E:Export e:Quick r:Refresh /:Toggle Tab:Switch q:Quit"
DIFF_FOOTER_HINT = "PgUp/PgDn: Scroll Diff"
STATUS_RIGHT_TEXT = "│ lazydiff"


@dataclass
class RenderContext:
    state: BrowserState
    layout: DashboardLayout
    theme: UITheme
    repo_label: str = ""
    export_base: str = ""


def selected_with_ansi(text: str) -> str:
    """Apply selection styling without discarding existing ANSI colors."""
    if not text:
        return text

    # Keep reverse video active even when the text contains internal resets.
    return "\033[7m" + text.replace("\033[0m", "\033[0;7m") + "\033[0m"


def build_status_line(left_text: str, width: int, right_text: str = STATUS_RIGHT_TEXT) -> str:
    usable = max(1, width - 1)
    if usable <= len(right_text):
        return right_text[-usable:]
    left_limit = max(0, usable - len(right_text) - 1)
    left = left_text[:left_limit]
    gap = " " * (usable - len(left) - len(right_text))
    return f"{left}{gap}{right_text}"


def scroll_percent(scroll_top: int, total_lines: int, visible_rows: int) -> int:
    if total_lines <= 0:
        return 0
    max_start = max(0, total_lines - max(1, visible_rows))
    if max_start <= 0:
        return 0
    clamped_start = max(0, min(scroll_top, max_start))
    return int((clamped_start / max_start) * 100)


def _files_pane_lines(context: RenderContext) -> list[str]:
    state = context.state
    theme = context.theme
    width = context.layout.left_width
    active = state.focus_pane == PANE_FILES
    selected_count = len(live_selection(state.selection, state.unstaged, state.staged))
    lines = [pane_header("Files", active, theme, view_mode_label(state.view_mode), selected_count)]
    if not state.rows:
        lines.append(f"{theme.diff_dim}  No changes{theme.reset}")
    for offset in range(context.layout.files_rows - (0 if state.rows else 1)):
        index = state.scroll_top + offset
        if index >= len(state.rows):
            lines.append("")
            continue
        text = format_display_row(state.rows[index], state.selection, state.collapsed, state.view_mode, theme)
        if active and index == state.focus_index:
            text = selected_with_ansi(fit_ansi_cell(text, width, reset=""))
        lines.append(text)
    return lines


def _commits_pane_lines(context: RenderContext) -> list[str]:
    state = context.state
    theme = context.theme
    width = context.layout.left_width
    active = state.focus_pane == PANE_COMMITS
    lines = [pane_header("Commits", active, theme, selected_count=len(state.selected_commits))]
    if not state.commits:
        lines.append(f"{theme.diff_dim}  No commits{theme.reset}")
    for offset in range(context.layout.commit_rows - (0 if state.commits else 1)):
        index = state.commit_scroll_top + offset
        if index >= len(state.commits):
            lines.append("")
            continue
        commit = state.commits[index]
        focused = index == state.commit_focus_index
        text = format_commit_row(commit, focused, commit.hash in state.selected_commits, theme)
        if active and focused:
            text = selected_with_ansi(fit_ansi_cell(text, width, reset=""))
        lines.append(text)
    return lines


def _diff_pane_lines(context: RenderContext) -> list[str]:
    state = context.state
    theme = context.theme
    rows = context.layout.diff_rows
    if state.diff_title:
        title = sanitize_terminal_text(state.diff_title)
    else:
        title = "No commit" if state.focus_pane == PANE_COMMITS else "No file"
    header = f"{theme.diff_title}{title}{theme.reset}"
    if len(state.diff_lines) > rows:
        percent = scroll_percent(state.diff_scroll_top, len(state.diff_lines), rows)
        header += f" {theme.diff_dim}[{percent}%]{theme.reset}"

    lines = [header]
    if state.diff_loading and not state.diff_lines:
        lines.append(f"{theme.diff_dim}Loading...{theme.reset}")
    visible = state.diff_lines[state.diff_scroll_top : state.diff_scroll_top + rows]
    lines.extend(visible)
    while len(lines) < rows + 1:
        lines.append("")
    del lines[rows + 1 :]
    lines.append(f"{theme.footer_hint}{DIFF_FOOTER_HINT}{theme.reset}")
    return lines


def _default_status_text(context: RenderContext) -> str:
    state = context.state
    changed = len(state.unstaged) + len(state.staged)
    parts = [part for part in (context.repo_label, f"{changed} changes", f"{len(state.commits)} commits") if part]
    return " | ".join(parts)


def build_dashboard_frame(context: RenderContext) -> str:
    """Return the complete ANSI frame for normal mode."""
    layout = context.layout
    theme = context.theme
    state = context.state
    left = _files_pane_lines(context) + _commits_pane_lines(context)
    left.append(f"{theme.footer_hint}{FOOTER_HINT}{theme.reset}")
    right = _diff_pane_lines(context)
    divider = f"{theme.divider}│{theme.reset}"

    out: list[str] = ["\033[H\033[J"]
    for row in range(layout.body_rows):
        left_text = left[row] if row < len(left) else ""
        right_text = right[row] if row < len(right) else ""
        out.append(fit_ansi_cell(left_text, layout.left_width))
        out.append(divider)
        right_clipped = clip_ansi_line(right_text, layout.right_width)
        out.append(right_clipped)
        if "\033" in right_clipped:
            out.append("\033[0m")
        out.append("\r\n")

    status_text = sanitize_terminal_text(state.status_message or _default_status_text(context))
    status = build_status_line(status_text, layout.width)
    out.append(theme.reverse)
    out.append(status)
    out.append(theme.reset)
    return "".join(out)


def build_frame(context: RenderContext) -> str:
    layout = context.layout
    if context.state.in_path_entry:
        return build_export_modal(context.state, layout.width, layout.height, context.theme, context.export_base)
    return build_dashboard_frame(context)


def render_frame(context: RenderContext) -> None:
    os.write(sys.stdout.fileno(), build_frame(context).encode("utf-8", errors="replace"))


__all__ = [
    "RenderContext",
    "build_dashboard_frame",
    "build_frame",
    "build_status_line",
    "render_frame",
    "scroll_percent",
    "selected_with_ansi",
]
