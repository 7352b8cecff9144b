"""Full-screen export path entry modal."""

from __future__ import annotations

from ..ansi import clip_ansi_line, display_width
from ..highlight import sanitize_terminal_text
from ..state import (
    DUMP_LAYOUT_FLAT,
    MODE_EXPORT_CODE_DUMP,
    MODE_EXPORT_DIFF,
    MODE_EXPORT_OVERVIEW,
    PANE_COMMITS,
    BrowserState,
)
from ..ui_theme import UITheme

MODAL_TITLES = {
    MODE_EXPORT_DIFF: "Export Diff to File",
    MODE_EXPORT_OVERVIEW: "Export File Overview",
    MODE_EXPORT_CODE_DUMP: "Export Code Dump",
}
TIMESTAMP_PLACEHOLDER = "YYYYMMDD_HHMMSS"


def default_destination_hint(state: BrowserState) -> str:
    """Describe the destination used when the path is left empty."""
    if state.input_mode == MODE_EXPORT_OVERVIEW:
        return f"files_overview_{TIMESTAMP_PLACEHOLDER}.txt"
    if state.input_mode == MODE_EXPORT_CODE_DUMP:
        return f"./code_dump_{TIMESTAMP_PLACEHOLDER}/"
    if state.focus_pane == PANE_COMMITS:
        if state.selected_commits:
            return f"commits_{TIMESTAMP_PLACEHOLDER}.txt"
        index = state.commit_focus_index
        if 0 <= index < len(state.commits):
            return f"diff_{state.commits[index].hash}_{TIMESTAMP_PLACEHOLDER}.txt"
    return f"diff_{TIMESTAMP_PLACEHOLDER}.txt"


def export_scope_text(state: BrowserState) -> str:
    if state.input_mode == MODE_EXPORT_OVERVIEW:
        return "All Git tracked files"
    if state.input_mode == MODE_EXPORT_CODE_DUMP:
        return "Merge C++ & export all files"
    if state.focus_pane == PANE_COMMITS:
        if state.selected_commits:
            return f"{len(state.selected_commits)} commit(s) selected"
        return "Current commit"
    return f"{len(state.selection)} file(s) selected"


def path_line(state: BrowserState, theme: UITheme) -> str:
    """Buffer text with a reverse-video cursor cell, or the default hint when empty."""
    raw = state.path_buffer
    if not raw:
        return f"\033[7m \033[0m {theme.modal_hint}(default: {default_destination_hint(state)}){theme.reset}"
    cursor = max(0, min(state.cursor_pos, len(raw)))
    before = sanitize_terminal_text(raw[:cursor])
    under = sanitize_terminal_text(raw[cursor]) if cursor < len(raw) else " "
    after = sanitize_terminal_text(raw[cursor + 1 :])
    return f"{before}\033[7m{under}\033[0m{after}"


def hint_lines(state: BrowserState, width: int) -> list[str]:
    """Key hints joined by `` | `` and wrapped between hints to fit ``width``."""
    parts = ["Enter: Export"]
    if state.input_mode == MODE_EXPORT_CODE_DUMP:
        parts.append("Tab: Switch Mode")
    parts.extend(["Ctrl-V: Paste", "Ctrl-U: Clear", "Esc: Cancel"])

    lines: list[str] = []
    current = ""
    for part in parts:
        candidate = f"{current} | {part}" if current else part
        if current and display_width(candidate) > width:
            lines.append(current)
            candidate = part
        current = candidate
    lines.append(current)
    return lines


def modal_body_lines(state: BrowserState, theme: UITheme, text_width: int = 76, base_label: str = "") -> list[str]:
    lines: list[str] = [""]
    if state.input_mode == MODE_EXPORT_CODE_DUMP:
        mode_label = "Flat" if state.dump_layout == DUMP_LAYOUT_FLAT else "Tree"
        lines.append(
            f"{theme.modal_hint}Mode: {theme.reset}{theme.modal_info}{mode_label}{theme.reset}"
            f"{theme.modal_hint} - Press Tab to switch{theme.reset}"
        )
        lines.append("")
    lines.append(f"{theme.modal_hint}Path: {theme.reset}{path_line(state, theme)}")
    lines.append("")
    lines.append(f"{theme.modal_info}{export_scope_text(state)}{theme.reset}")
    if state.input_mode == MODE_EXPORT_CODE_DUMP and state.path_buffer.strip():
        target = sanitize_terminal_text(state.path_buffer.strip().rstrip("/"))
        lines.append(f"{theme.modal_hint}→ Will create: {target}/code_dump_{TIMESTAMP_PLACEHOLDER}/{theme.reset}")
    if base_label:
        lines.append(f"{theme.modal_hint}Relative to: {sanitize_terminal_text(base_label)}{theme.reset}")
    lines.append("")
    lines.extend(f"{theme.modal_hint}{hint}{theme.reset}" for hint in hint_lines(state, text_width))
    return lines


def build_export_modal(state: BrowserState, width: int, height: int, theme: UITheme, base_label: str = "") -> str:
    """Return a frame with a dim backdrop and a centered rounded path entry box."""
    out: list[str] = ["\033[H\033[J"]
    modal_w = max(10, min(80, width - 4))
    body = modal_body_lines(state, theme, max(1, modal_w - 4), base_label)

    modal_h = min(max(3, height), len(body) + 2)
    x = max(0, (width - modal_w) // 2)
    y = max(0, (height - modal_h) // 2)
    inner_w = max(1, modal_w - 2)
    inner_h = max(1, modal_h - 2)
    border = theme.modal_border
    reset = theme.reset

    # Draw a subtle dim backdrop.
    for row in range(height):
        out.append(f"\033[{row + 1};1H{theme.modal_backdrop}")
        out.append(" " * max(1, width - 1))
        out.append(reset)

    # Rounded frame.
    out.append(f"\033[{y + 1};{x + 1}H{border}╭")
    out.append("─" * inner_w)
    out.append(f"╮{reset}")
    for i in range(inner_h):
        out.append(f"\033[{y + 2 + i};{x + 1}H{border}│{reset}")
        out.append(" " * inner_w)
        out.append(f"{border}│{reset}")
    out.append(f"\033[{y + modal_h};{x + 1}H{border}╰")
    out.append("─" * inner_w)
    out.append(f"╯{reset}")

    title = MODAL_TITLES.get(state.input_mode, "Export")
    title_x = x + max(2, (modal_w - 2 - display_width(title)) // 2)
    out.append(f"\033[{y + 1};{title_x + 1}H")
    out.append(f"{theme.modal_title} {title} {reset}")

    for i in range(min(len(body), inner_h)):
        out.append(f"\033[{y + 2 + i};{x + 3}H")
        out.append(clip_ansi_line(body[i], inner_w - 2))
        out.append("\033[0m")

    return "".join(out)
