"""Mutable dashboard state shared by the loop, key handlers, and controller."""

from __future__ import annotations

from dataclasses import dataclass, field

from .export.code_dump import LAYOUT_FLAT, LAYOUT_TREE
from .git.types import ChangeRecord, CommitRecord
from .list_model import VIEW_FLAT, DisplayRow

PANE_FILES = "files"
PANE_COMMITS = "commits"

MODE_NORMAL = "normal"
MODE_EXPORT_DIFF = "export_diff"
MODE_EXPORT_OVERVIEW = "export_overview"
MODE_EXPORT_CODE_DUMP = "export_code_dump"
PATH_ENTRY_MODES = frozenset({MODE_EXPORT_DIFF, MODE_EXPORT_OVERVIEW, MODE_EXPORT_CODE_DUMP})

DUMP_LAYOUT_TREE = LAYOUT_TREE
DUMP_LAYOUT_FLAT = LAYOUT_FLAT


@dataclass
class BrowserState:
    focus_index: int = 0
    scroll_top: int = 0
    selection: set[str] = field(default_factory=set)
    collapsed: set[str] = field(default_factory=set)
    view_mode: str = VIEW_FLAT
    focus_pane: str = PANE_FILES
    commit_focus_index: int = 0
    commit_scroll_top: int = 0
    selected_commits: set[str] = field(default_factory=set)
    diff_scroll_top: int = 0
    input_mode: str = MODE_NORMAL
    path_buffer: str = ""
    cursor_pos: int = 0
    dump_layout: str = DUMP_LAYOUT_TREE
    unstaged: list[ChangeRecord] = field(default_factory=list)
    staged: list[ChangeRecord] = field(default_factory=list)
    commits: list[CommitRecord] = field(default_factory=list)
    rows: list[DisplayRow] = field(default_factory=list)
    diff_lines: list[str] = field(default_factory=list)
    diff_title: str = ""
    diff_key: str | None = None
    diff_request_id: int = 0
    diff_loading: bool = False
    left_width: int = 0
    files_rows: int = 1
    commit_rows: int = 1
    diff_rows: int = 1
    status_message: str = ""
    status_message_until: float = 0.0
    dirty: bool = True
    skip_next_lf: bool = False

    @property
    def in_path_entry(self) -> bool:
        return self.input_mode in PATH_ENTRY_MODES
