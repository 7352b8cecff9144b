"""Dashboard operations bound to one ``BrowserState``.

Key handlers call into ``DashboardController``; it schedules git reads,
clipboard reads and export writes on ``FetchScheduler`` channels and applies
their results when the main loop calls ``drain``. Only ``drain`` and the key
operations mutate state, both from the loop thread.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable

from .. import config
from ..clipboard import read_clipboard
from ..errors import ExportError
from ..export import ExportOrchestrator, ExportResult
from ..git.types import GROUP_STAGED, CommitRecord
from ..highlight import DEFAULT_STYLE, format_diff_lines
from ..input import path_buffer
from ..list_model import (
    VIEW_FLAT,
    VIEW_TREE,
    DirectoryRow,
    focused_file_row,
    rebuild_rows,
    row_at,
    selected_export_entries,
    toggle_row_selection,
    toggle_selection,
    toggle_smart_selection,
)
from ..scroll import clamp_text_scroll, page_text_scroll, reclamp
from ..state import (
    DUMP_LAYOUT_TREE,
    MODE_EXPORT_CODE_DUMP,
    MODE_EXPORT_DIFF,
    MODE_EXPORT_OVERVIEW,
    PANE_COMMITS,
    PANE_FILES,
    BrowserState,
)
from .fetch import FetchResult, FetchScheduler

LOG = logging.getLogger(__name__)

STATUS_MESSAGE_SECONDS = 3.0
DIFF_ERROR_TEXT = "(Error loading diff)"
COMMIT_DIFF_ERROR_TEXT = "(Error loading commit diff)"
LIST_REFRESH_KEY = "lists"


class DashboardController:
    """Bind dashboard behavior to state, git service, exporter and schedulers."""

    def __init__(
        self,
        state: BrowserState,
        git,
        exporter: ExportOrchestrator,
        *,
        max_commits: int = config.DEFAULT_MAX_COMMITS,
        diff_style: str = DEFAULT_STYLE,
        no_color: bool = False,
        list_scheduler: FetchScheduler | None = None,
        diff_scheduler: FetchScheduler | None = None,
        task_scheduler: FetchScheduler | None = None,
        save_view_mode: Callable[[str], None] = config.save_view_mode,
        paste_source: Callable[[], str] = read_clipboard,
        monotonic: Callable[[], float] = time.monotonic,
    ) -> None:
        self.state = state
        self.git = git
        self.exporter = exporter
        self.max_commits = max_commits
        self.diff_style = diff_style
        self.no_color = no_color
        self.list_scheduler = list_scheduler or FetchScheduler(coalesce=True, name="lazydiff-lists")
        self.diff_scheduler = diff_scheduler or FetchScheduler(coalesce=True, name="lazydiff-diff")
        self.task_scheduler = task_scheduler or FetchScheduler(coalesce=False, name="lazydiff-tasks")
        self._save_view_mode = save_view_mode
        self._paste_source = paste_source
        self._monotonic = monotonic
        self._list_request_id = 0
        self._task_callbacks: dict[int, Callable[[FetchResult], None]] = {}

    def set_status(self, message: str) -> None:
        self.state.status_message = message
        self.state.status_message_until = self._monotonic() + STATUS_MESSAGE_SECONDS
        self.state.dirty = True

    def refresh(self) -> None:
        """Reload both change groups and the commit history in the background."""
        git = self.git
        max_commits = self.max_commits

        def job() -> tuple[list, list, list[CommitRecord]]:
            unstaged, staged = git.list_changes()
            return unstaged, staged, git.list_history(max_commits)

        self._list_request_id = self.list_scheduler.schedule(LIST_REFRESH_KEY, job)

    def _apply_lists(self, result: FetchResult) -> None:
        if result.request.request_id != self._list_request_id:
            return
        if not result.ok:
            self.set_status(f"✗ Refresh failed: {result.error}")
            return
        unstaged, staged, commits = result.value
        state = self.state
        state.unstaged = list(unstaged)
        state.staged = list(staged)
        state.commits = list(commits)
        known = {commit.hash for commit in state.commits}
        state.selected_commits = {hash for hash in state.selected_commits if hash in known}
        self.rebuild()
        self.request_diff(force=True)

    def rebuild(self) -> None:
        state = self.state
        state.rows = rebuild_rows(state.unstaged, state.staged, state.view_mode, state.collapsed)
        self.reclamp_all()
        state.dirty = True

    def reclamp_all(self) -> None:
        """Re-apply the scroll window rule to every pane for the current viewport."""
        state = self.state
        state.focus_index, state.scroll_top = reclamp(
            state.focus_index, state.scroll_top, state.files_rows, len(state.rows)
        )
        state.commit_focus_index, state.commit_scroll_top = reclamp(
            state.commit_focus_index, state.commit_scroll_top, state.commit_rows, len(state.commits)
        )
        state.diff_scroll_top = clamp_text_scroll(state.diff_scroll_top, state.diff_rows, len(state.diff_lines))

    def focused_commit(self) -> CommitRecord | None:
        index = self.state.commit_focus_index
        if 0 <= index < len(self.state.commits):
            return self.state.commits[index]
        return None

    def _diff_target(self) -> tuple[str | None, str, Callable[[], str] | None]:
        """Return ``(key, title, job)`` for the active pane's focus."""
        state = self.state
        git = self.git
        if state.focus_pane == PANE_COMMITS:
            commit = self.focused_commit()
            if commit is None:
                return None, "", None
            return (
                f"commit:{commit.hash}",
                f"{commit.hash} - {commit.message}",
                lambda: git.get_commit_diff(commit.hash),
            )
        row = focused_file_row(state.rows, state.focus_index)
        if row is None:
            return None, "", None
        record = row.record
        staged = row.group == GROUP_STAGED
        return (
            f"file:{row.group}:{record.path}",
            record.path,
            lambda: git.get_file_diff(record.path, staged, record.status),
        )

    def request_diff(self, force: bool = False) -> None:
        """Fetch the diff for whatever the active pane focuses.

        Nothing is fetched when the focus target is unchanged unless ``force``.
        A new target resets the diff scroll.
        """
        state = self.state
        key, title, job = self._diff_target()
        if key == state.diff_key and not force:
            return
        if key != state.diff_key:
            state.diff_scroll_top = 0
            state.diff_lines = []
        state.diff_key = key
        state.diff_title = title
        state.dirty = True
        if job is None:
            state.diff_loading = False
            state.diff_lines = []
            state.diff_request_id = 0
            return
        state.diff_loading = True
        state.diff_request_id = self.diff_scheduler.schedule(key, job)

    def _apply_diff(self, result: FetchResult) -> None:
        state = self.state
        request = result.request
        if request.request_id != state.diff_request_id or request.key != state.diff_key:
            LOG.debug("discarding stale diff for %s", request.key)
            return
        if result.ok:
            state.diff_lines = format_diff_lines(str(result.value), self.diff_style, self.no_color)
        elif request.key.startswith("commit:"):
            state.diff_lines = [COMMIT_DIFF_ERROR_TEXT]
        else:
            state.diff_lines = [DIFF_ERROR_TEXT]
        state.diff_loading = False
        state.diff_scroll_top = clamp_text_scroll(state.diff_scroll_top, state.diff_rows, len(state.diff_lines))
        state.dirty = True

    def scroll_diff(self, direction: int) -> None:
        state = self.state
        state.diff_scroll_top = page_text_scroll(state.diff_scroll_top, direction, state.diff_rows, len(state.diff_lines))

    def move_focus(self, delta: int) -> None:
        state = self.state
        if state.focus_pane == PANE_COMMITS:
            state.commit_focus_index, state.commit_scroll_top = reclamp(
                state.commit_focus_index + delta, state.commit_scroll_top, state.commit_rows, len(state.commits)
            )
        else:
            state.focus_index, state.scroll_top = reclamp(
                state.focus_index + delta, state.scroll_top, state.files_rows, len(state.rows)
            )
        self.request_diff()

    def jump_focus(self, to_end: bool) -> None:
        state = self.state
        total = len(state.commits) if state.focus_pane == PANE_COMMITS else len(state.rows)
        target = total - 1 if to_end else 0
        if state.focus_pane == PANE_COMMITS:
            delta = target - state.commit_focus_index
        else:
            delta = target - state.focus_index
        self.move_focus(delta)

    def switch_pane(self, target: str | None = None) -> None:
        state = self.state
        if target is None:
            target = PANE_COMMITS if state.focus_pane == PANE_FILES else PANE_FILES
        if target == state.focus_pane:
            return
        state.focus_pane = target
        self.request_diff()

    def toggle_view_mode(self) -> None:
        state = self.state
        state.view_mode = VIEW_TREE if state.view_mode == VIEW_FLAT else VIEW_FLAT
        state.focus_index = 0
        state.scroll_top = 0
        self._save_view_mode(state.view_mode)
        self.rebuild()
        self.request_diff()

    def toggle_focused_selection(self) -> None:
        state = self.state
        if state.focus_pane == PANE_COMMITS:
            commit = self.focused_commit()
            if commit is not None:
                state.selected_commits = toggle_selection(state.selected_commits, commit.hash)
            return
        row = row_at(state.rows, state.focus_index)
        state.selection = toggle_row_selection(state.selection, row, state.unstaged, state.staged)

    def toggle_focused_directory(self) -> None:
        state = self.state
        if state.focus_pane != PANE_FILES or state.view_mode != VIEW_TREE:
            return
        row = row_at(state.rows, state.focus_index)
        if not isinstance(row, DirectoryRow):
            return
        state.collapsed = toggle_selection(state.collapsed, row.node.path)
        self.rebuild()
        self.request_diff()

    def smart_select(self) -> None:
        state = self.state
        state.selection = toggle_smart_selection(state.selection, state.rows, row_at(state.rows, state.focus_index))

    def begin_path_entry(self, mode: str) -> None:
        state = self.state
        if (
            mode == MODE_EXPORT_DIFF
            and state.focus_pane == PANE_FILES
            and not selected_export_entries(state.selection, state.unstaged, state.staged)
        ):
            self.set_status("No files selected")
            return
        if mode == MODE_EXPORT_CODE_DUMP:
            state.dump_layout = DUMP_LAYOUT_TREE
        state.input_mode = mode
        state.path_buffer = ""
        state.cursor_pos = 0
        state.dirty = True

    def _run_export(self, key: str, job: Callable[[], ExportResult], on_success: Callable[[], None] | None = None) -> None:
        def done(result: FetchResult) -> None:
            if result.ok:
                self.set_status(result.value.message)
                if on_success is not None:
                    on_success()
                return
            error = result.error
            reason = str(error) if isinstance(error, ExportError) else f"{type(error).__name__}: {error}"
            self.set_status(f"✗ Export failed: {reason}")

        request_id = self.task_scheduler.schedule(key, job)
        self._task_callbacks[request_id] = done

    def export_focused_file(self) -> None:
        row = focused_file_row(self.state.rows, self.state.focus_index)
        if row is None:
            self.set_status("No file selected")
            return
        record = row.record
        staged = row.group == GROUP_STAGED
        self._run_export(
            "export:single",
            lambda: self.exporter.export_single(record.path, staged, record.status),
        )

    def export_selected_files(self, raw_path: str) -> None:
        state = self.state
        entries = selected_export_entries(state.selection, state.unstaged, state.staged)
        if not entries:
            self.set_status("No files selected")
            return
        self._run_export("export:multi", lambda: self.exporter.export_multi(entries, raw_path))

    def export_commits(self, raw_path: str) -> None:
        """Export the selected commits in history order, or the focused one."""
        state = self.state
        chosen = [commit for commit in state.commits if commit.hash in state.selected_commits]
        if chosen:

            def clear_selection() -> None:
                state.selected_commits = set()

            self._run_export(
                "export:commits",
                lambda: self.exporter.export_commit_set(chosen, raw_path),
                on_success=clear_selection,
            )
            return
        commit = self.focused_commit()
        if commit is None:
            self.set_status("No commit selected")
            return
        self._run_export("export:commit", lambda: self.exporter.export_commit(commit, raw_path))

    def confirm_export(self, mode: str, raw_path: str) -> None:
        state = self.state
        if mode == MODE_EXPORT_DIFF:
            if state.focus_pane == PANE_COMMITS:
                self.export_commits(raw_path)
            else:
                self.export_selected_files(raw_path)
        elif mode == MODE_EXPORT_OVERVIEW:
            self._run_export("export:overview", lambda: self.exporter.export_overview(raw_path))
        elif mode == MODE_EXPORT_CODE_DUMP:
            layout = state.dump_layout
            self._run_export("export:code_dump", lambda: self.exporter.export_code_dump(raw_path, layout))
        else:
            raise ValueError(f"not an export mode: {mode}")

    def quick_export(self) -> None:
        if self.state.focus_pane == PANE_COMMITS:
            self.export_commits("")
        else:
            self.export_focused_file()

    def quick_overview(self) -> None:
        self._run_export("export:overview", lambda: self.exporter.export_overview(""))

    def request_paste(self) -> None:
        """Read the clipboard in the background; the text lands at the cursor current on arrival."""
        mode = self.state.input_mode

        def done(result: FetchResult) -> None:
            state = self.state
            if not result.ok:
                self.set_status("✗ Clipboard paste failed")
                return
            if state.input_mode != mode:
                return
            text = path_buffer.single_line(str(result.value))
            state.path_buffer, state.cursor_pos = path_buffer.insert_text(state.path_buffer, state.cursor_pos, text)
            state.dirty = True

        request_id = self.task_scheduler.schedule("clipboard", self._paste_source)
        self._task_callbacks[request_id] = done

    def drain(self) -> None:
        """Apply every finished background result to state."""
        for result in self.list_scheduler.drain_results():
            self._apply_lists(result)
        for result in self.diff_scheduler.drain_results():
            self._apply_diff(result)
        for result in self.task_scheduler.drain_results():
            callback = self._task_callbacks.pop(result.request.request_id, None)
            if callback is not None:
                callback(result)
