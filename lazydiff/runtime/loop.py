"""Main interactive event loop for the dashboard.

Coordinates background result draining, resize bookkeeping, rendering, and
input dispatch. Feature logic lives in the injected callbacks.
"""

from __future__ import annotations

import shutil
import time
from collections.abc import Callable
from dataclasses import dataclass

from ..input import read_key
from ..layout import DashboardLayout, clamp_left_width, compute_layout
from ..state import BrowserState
from .terminal import TerminalController

KEY_POLL_TIMEOUT_MS = 120
LEFT_WIDTH_STEP = 2


@dataclass(frozen=True)
class RuntimeLoopCallbacks:
    """Injected operations used by ``run_main_loop``."""

    drain_results: Callable[[], None]
    reclamp_all: Callable[[], None]
    render: Callable[[DashboardLayout], None]
    handle_normal_key: Callable[[str], bool]
    handle_path_entry_key: Callable[[str], None]
    save_left_pane_width: Callable[[int, int], None]


def apply_layout(state: BrowserState, layout: DashboardLayout) -> bool:
    """Copy viewport sizes into state; return whether anything changed."""
    changed = (
        state.left_width != layout.left_width
        or state.files_rows != layout.files_rows
        or state.commit_rows != layout.commit_rows
        or state.diff_rows != layout.diff_rows
    )
    state.left_width = layout.left_width
    state.files_rows = layout.files_rows
    state.commit_rows = layout.commit_rows
    state.diff_rows = layout.diff_rows
    return changed


def normalize_enter(state: BrowserState, key: str) -> str | None:
    """Fold CR/LF variants into ``ENTER``; ``None`` means drop the key."""
    if state.skip_next_lf and key == "ENTER_LF":
        state.skip_next_lf = False
        return None
    if key == "ENTER_CR":
        state.skip_next_lf = True
        return "ENTER"
    state.skip_next_lf = False
    if key == "ENTER_LF":
        return "ENTER"
    return key


def run_main_loop(
    state: BrowserState,
    terminal: TerminalController,
    stdin_fd: int,
    callbacks: RuntimeLoopCallbacks,
) -> None:
    """Run the dashboard until a quit key is pressed."""
    ops = callbacks

    def adjust_left_pane_width(term_columns: int, delta: int) -> None:
        prev_left = state.left_width
        state.left_width = clamp_left_width(term_columns, state.left_width + delta)
        if state.left_width == prev_left:
            return
        ops.save_left_pane_width(term_columns, state.left_width)
        state.dirty = True

    with terminal.raw_mode():
        while True:
            term = shutil.get_terminal_size((80, 24))
            now = time.monotonic()
            if state.status_message and now >= state.status_message_until:
                state.status_message = ""
                state.status_message_until = 0.0
                state.dirty = True

            ops.drain_results()

            layout = compute_layout(term.columns, term.lines, state.left_width)
            if apply_layout(state, layout):
                ops.reclamp_all()
                state.dirty = True

            if state.dirty:
                ops.render(layout)
                state.dirty = False

            try:
                key = read_key(stdin_fd, timeout_ms=KEY_POLL_TIMEOUT_MS)
            except KeyboardInterrupt:
                # Ignore SIGINT-style interrupts so terminal copy shortcuts do not exit the app.
                continue
            if key == "":
                continue
            normalized = normalize_enter(state, key)
            if normalized is None:
                continue
            key = normalized

            if state.in_path_entry:
                ops.handle_path_entry_key(key)
                continue

            if key == "SHIFT_LEFT":
                adjust_left_pane_width(term.columns, -LEFT_WIDTH_STEP)
                continue
            if key == "SHIFT_RIGHT":
                adjust_left_pane_width(term.columns, LEFT_WIDTH_STEP)
                continue

            if ops.handle_normal_key(key):
                break
