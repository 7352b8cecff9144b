"""Runtime composition layer for lazydiff.

Builds initial state, constructs the git service and exporter once, wires the
key handlers to the controller, and starts the loop.
"""

from __future__ import annotations

import logging
import shutil
import sys
from pathlib import Path

from ..config import (
    load_left_pane_percent,
    load_max_commits,
    load_theme_name,
    load_view_mode,
    save_left_pane_percent,
)
from ..export import ExportOrchestrator
from ..git import GitService
from ..input import (
    NormalKeyContext,
    NormalKeyHandler,
    PathEntryKeyContext,
    handle_path_entry_key,
)
from ..layout import DashboardLayout, compute_layout, compute_left_width
from ..list_model import VIEW_FLAT
from ..render import RenderContext, render_frame
from ..state import BrowserState
from ..ui_theme import resolve_theme
from .controller import DashboardController
from .loop import RuntimeLoopCallbacks, apply_layout, run_main_loop
from .terminal import TerminalController

LOG = logging.getLogger(__name__)


def build_initial_state(total_width: int, total_height: int, left_pane_percent: float | None) -> BrowserState:
    """Return a fresh state sized for the current terminal."""
    state = BrowserState(view_mode=load_view_mode() or VIEW_FLAT)
    left_width = compute_left_width(total_width, left_pane_percent)
    apply_layout(state, compute_layout(total_width, total_height, left_width))
    return state


def build_normal_key_context(state: BrowserState, controller: DashboardController) -> NormalKeyContext:
    return NormalKeyContext(
        state=state,
        move_focus=controller.move_focus,
        jump_focus=controller.jump_focus,
        switch_pane=controller.switch_pane,
        scroll_diff=controller.scroll_diff,
        toggle_view_mode=controller.toggle_view_mode,
        toggle_focused_selection=controller.toggle_focused_selection,
        toggle_focused_directory=controller.toggle_focused_directory,
        smart_select=controller.smart_select,
        begin_path_entry=controller.begin_path_entry,
        quick_export=controller.quick_export,
        quick_overview=controller.quick_overview,
        refresh=controller.refresh,
    )


def run_dashboard(
    repo_root: Path,
    *,
    style: str = "monokai",
    no_color: bool = False,
    theme_name: str | None = None,
    max_commits: int | None = None,
    left_pane_percent: float | None = None,
) -> None:
    """Run the interactive dashboard for the repository at ``repo_root``."""
    repo_root = repo_root.resolve()
    if not sys.stdin.isatty():
        raise SystemExit("lazydiff needs an interactive terminal")

    theme = resolve_theme(theme_name or load_theme_name(), no_color=no_color)
    if left_pane_percent is None:
        left_pane_percent = load_left_pane_percent()
    if max_commits is None:
        max_commits = load_max_commits()

    term = shutil.get_terminal_size((80, 24))
    state = build_initial_state(term.columns, term.lines, left_pane_percent)

    git = GitService(repo_root)
    exporter = ExportOrchestrator(git, repo_root)
    controller = DashboardController(
        state,
        git,
        exporter,
        max_commits=max_commits,
        diff_style=style,
        no_color=no_color,
    )
    normal_context = build_normal_key_context(state, controller)
    path_entry_context = PathEntryKeyContext(
        state=state,
        confirm_export=controller.confirm_export,
        request_paste=controller.request_paste,
    )

    def render(layout: DashboardLayout) -> None:
        render_frame(
            RenderContext(
                state=state,
                layout=layout,
                theme=theme,
                repo_label=repo_root.name,
                export_base=str(repo_root),
            )
        )

    callbacks = RuntimeLoopCallbacks(
        drain_results=controller.drain,
        reclamp_all=controller.reclamp_all,
        render=render,
        handle_normal_key=NormalKeyHandler(normal_context).handle,
        handle_path_entry_key=lambda key: handle_path_entry_key(key, path_entry_context),
        save_left_pane_width=save_left_pane_percent,
    )

    LOG.info("starting dashboard in %s", repo_root)
    controller.refresh()
    stdin_fd = sys.stdin.fileno()
    terminal = TerminalController(stdin_fd, sys.stdout.fileno())
    run_main_loop(state, terminal, stdin_fd, callbacks)
    LOG.info("dashboard closed")
