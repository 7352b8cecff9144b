"""Smoke tests for dashboard and export modal frames."""

from __future__ import annotations

import unittest

from lazydiff.ansi import strip_ansi
from lazydiff.git.types import ChangeRecord, CommitRecord
from lazydiff.layout import compute_layout
from lazydiff.list_model import VIEW_TREE, rebuild_rows
from lazydiff.render import (
    DIFF_FOOTER_HINT,
    RenderContext,
    build_frame,
    build_status_line,
    scroll_percent,
    selected_with_ansi,
)
from lazydiff.render.modal import hint_lines
from lazydiff.state import (
    DUMP_LAYOUT_FLAT,
    MODE_EXPORT_CODE_DUMP,
    MODE_EXPORT_DIFF,
    PANE_COMMITS,
    BrowserState,
)
from lazydiff.ui_theme import DEFAULT_THEME, PLAIN_THEME


def _state(**overrides) -> BrowserState:
    unstaged = [
        ChangeRecord("src/a.ts", " M", "M"),
        ChangeRecord("src/b.ts", "??", "??"),
    ]
    staged = [ChangeRecord("new.py", "R ", "R", old_path="old.py")]
    state = BrowserState(
        unstaged=unstaged,
        staged=staged,
        commits=[
            CommitRecord("aaa1111", "Ada", "Add parser", "2024-01-02"),
            CommitRecord("bbb2222", "Ada", "Initial commit", "2024-01-01"),
        ],
        **overrides,
    )
    state.rows = rebuild_rows(state.unstaged, state.staged, state.view_mode, state.collapsed)
    return state


def _frame(state: BrowserState, theme=PLAIN_THEME, width: int = 140, height: int = 30) -> str:
    layout = compute_layout(width, height, 70)
    return build_frame(RenderContext(state=state, layout=layout, theme=theme, repo_label="repo"))


class DashboardFrameTests(unittest.TestCase):
    def test_frame_shows_panes_and_footers(self) -> None:
        state = _state(selection={"src/a.ts"})
        state.diff_title = "src/a.ts"
        state.diff_lines = ["diff --git a/src/a.ts b/src/a.ts", "+added"]

        text = strip_ansi(_frame(state))

        self.assertIn("Files ● (flat) [1 selected]", text)
        self.assertIn("Commits ○", text)
        self.assertIn("▼ Changes (2)", text)
        self.assertIn("[✓] M  src/a.ts", text)
        self.assertIn("[ ] R  old.py -> new.py", text)
        self.assertIn("aaa1111 Add parser", text)
        self.assertIn("+added", text)
        self.assertIn(DIFF_FOOTER_HINT, text)
        self.assertIn("↑↓:Nav Space:Select", text)
        self.assertIn("repo | 3 changes | 2 commits", text)

    def test_tree_mode_shows_collapsed_descendant_count(self) -> None:
        state = _state(view_mode=VIEW_TREE, collapsed={"src"})
        state.rows = rebuild_rows(state.unstaged, state.staged, state.view_mode, state.collapsed)

        text = strip_ansi(_frame(state))

        self.assertIn("▶ src/ (2)", text)
        self.assertNotIn("a.ts", text)

    def test_empty_lists_and_missing_diff(self) -> None:
        state = BrowserState(focus_pane=PANE_COMMITS)

        text = strip_ansi(_frame(state))

        self.assertIn("No changes", text)
        self.assertIn("No commits", text)
        self.assertIn("No commit", text)

    def test_loading_placeholder_and_scroll_percent(self) -> None:
        state = _state(diff_loading=True)
        state.diff_title = "src/a.ts"
        self.assertIn("Loading...", strip_ansi(_frame(state)))

        state.diff_loading = False
        state.diff_lines = [f"line {i}" for i in range(200)]
        state.diff_scroll_top = 0
        self.assertIn("src/a.ts [0%]", strip_ansi(_frame(state)))

    def test_status_message_replaces_summary(self) -> None:
        state = _state(status_message="No files selected")

        self.assertIn("No files selected", strip_ansi(_frame(state)))

    def test_control_bytes_in_names_are_escaped(self) -> None:
        state = _state(focus_pane=PANE_COMMITS)
        state.commits = [CommitRecord("abc1234", "x", "evil\x1b]0;pwned\x07msg", "2024")]
        state.unstaged = [ChangeRecord("bad\x1b[2Jname.py", "??", "??")]
        state.staged = []
        state.rows = rebuild_rows(state.unstaged, state.staged, state.view_mode, state.collapsed)
        state.diff_title = "abc1234 evil\x1b]0;t\x07"

        frame = _frame(state)

        self.assertNotIn("\x1b]0;", frame)
        self.assertNotIn("\x07", frame)
        self.assertNotIn("\x1b[2J", frame)
        self.assertIn("evil\\x1b]0;pwned\\x07msg", strip_ansi(frame))
        self.assertIn("bad\\x1b[2Jname.py", strip_ansi(frame))

    def test_selected_count_ignores_vanished_paths(self) -> None:
        state = _state(selection={"src/a.ts", "gone.py"})

        text = strip_ansi(_frame(state))

        self.assertIn("[1 selected]", text)
        self.assertNotIn("[2 selected]", text)

    def test_colored_theme_frame_has_same_text(self) -> None:
        state = _state()

        self.assertIn("▼ Changes (2)", strip_ansi(_frame(state, theme=DEFAULT_THEME)))


class ExportModalTests(unittest.TestCase):
    def test_diff_modal_shows_default_destination(self) -> None:
        state = _state(input_mode=MODE_EXPORT_DIFF, selection={"src/a.ts", "new.py"})

        text = strip_ansi(_frame(state))

        self.assertIn(" Export Diff to File ", text)
        self.assertIn("(default: diff_YYYYMMDD_HHMMSS.txt)", text)
        self.assertIn("2 file(s) selected", text)

    def test_commit_modal_default_uses_focused_hash(self) -> None:
        state = _state(input_mode=MODE_EXPORT_DIFF, focus_pane=PANE_COMMITS)

        text = strip_ansi(_frame(state))

        self.assertIn("(default: diff_aaa1111_YYYYMMDD_HHMMSS.txt)", text)
        self.assertIn("Current commit", text)

    def test_code_dump_modal_shows_layout_and_target(self) -> None:
        state = _state(input_mode=MODE_EXPORT_CODE_DUMP, dump_layout=DUMP_LAYOUT_FLAT)
        state.path_buffer = "dumps"
        state.cursor_pos = 5

        text = strip_ansi(_frame(state))

        self.assertIn(" Export Code Dump ", text)
        self.assertIn("Mode: Flat - Press Tab to switch", text)
        self.assertIn("→ Will create: dumps/code_dump_YYYYMMDD_HHMMSS/", text)
        self.assertIn("Merge C++ & export all files", text)
        self.assertIn("Esc: Cancel", text)

    def test_modal_names_the_export_base_directory(self) -> None:
        state = _state(input_mode=MODE_EXPORT_DIFF, selection={"src/a.ts"})
        layout = compute_layout(140, 30, 70)

        text = strip_ansi(
            build_frame(RenderContext(state=state, layout=layout, theme=PLAIN_THEME, export_base="/work/repo"))
        )

        self.assertIn("Relative to: /work/repo", text)
        self.assertNotIn("Relative to:", strip_ansi(_frame(state)))

    def test_hints_wrap_between_entries(self) -> None:
        state = _state(input_mode=MODE_EXPORT_CODE_DUMP)

        lines = hint_lines(state, 40)

        self.assertTrue(all(len(line) <= 40 for line in lines))
        self.assertEqual(len(lines), 3)
        self.assertEqual(
            " | ".join(lines),
            "Enter: Export | Tab: Switch Mode | Ctrl-V: Paste | Ctrl-U: Clear | Esc: Cancel",
        )
        self.assertEqual(hint_lines(_state(input_mode=MODE_EXPORT_DIFF), 200), [
            "Enter: Export | Ctrl-V: Paste | Ctrl-U: Clear | Esc: Cancel"
        ])


class RenderHelperTests(unittest.TestCase):
    def test_selected_with_ansi_keeps_reverse_after_resets(self) -> None:
        self.assertEqual(selected_with_ansi("a\033[0mb"), "\033[7ma\033[0;7mb\033[0m")
        self.assertEqual(selected_with_ansi(""), "")

    def test_status_line_fits_width(self) -> None:
        line = build_status_line("left side", 30)

        self.assertEqual(len(line), 29)
        self.assertTrue(line.startswith("left side"))
        self.assertTrue(line.endswith("│ lazydiff"))

    def test_scroll_percent(self) -> None:
        self.assertEqual(scroll_percent(0, 10, 20), 0)
        self.assertEqual(scroll_percent(50, 150, 50), 50)
        self.assertEqual(scroll_percent(500, 150, 50), 100)


if __name__ == "__main__":
    unittest.main()
