"""Tests for display-row construction and selection operations."""

from __future__ import annotations

import unittest

from lazydiff.git.types import ChangeRecord, ExportEntry
from lazydiff.list_model import (
    VIEW_FLAT,
    VIEW_TREE,
    DirectoryRow,
    FileRow,
    GroupRow,
    focused_file_row,
    live_selection,
    rebuild_rows,
    row_key,
    selected_export_entries,
    toggle_group_selection,
    toggle_row_selection,
    toggle_smart_selection,
)


def _record(path: str, code: str = " M") -> ChangeRecord:
    return ChangeRecord(path=path, status_code=code, status=code.strip())


def _describe(rows) -> list[tuple[str, str]]:
    out: list[tuple[str, str]] = []
    for row in rows:
        if isinstance(row, GroupRow):
            out.append(("group", f"{row.label}:{row.count}"))
        elif isinstance(row, DirectoryRow):
            out.append(("dir", row.node.path))
        elif isinstance(row, FileRow):
            out.append(("file", row.path))
    return out


class RebuildRowsTests(unittest.TestCase):
    def setUp(self) -> None:
        self.unstaged = [_record("src/a.ts", " M"), _record("src/b.ts", "??")]

    def test_tree_mode_rows_for_two_files_in_one_directory(self) -> None:
        rows = rebuild_rows(self.unstaged, [], VIEW_TREE, set())

        self.assertEqual(
            _describe(rows),
            [
                ("group", "Changes:2"),
                ("dir", "src"),
                ("file", "src/a.ts"),
                ("file", "src/b.ts"),
            ],
        )

    def test_collapsed_directory_hides_its_files(self) -> None:
        rows = rebuild_rows(self.unstaged, [], VIEW_TREE, {"src"})

        self.assertEqual(_describe(rows), [("group", "Changes:2"), ("dir", "src")])

    def test_flat_mode_lists_unstaged_then_staged(self) -> None:
        staged = [_record("lib/c.py", "M ")]
        rows = rebuild_rows(self.unstaged, staged, VIEW_FLAT, set())

        self.assertEqual(
            _describe(rows),
            [
                ("group", "Changes:2"),
                ("file", "src/a.ts"),
                ("file", "src/b.ts"),
                ("group", "Staged Changes:1"),
                ("file", "lib/c.py"),
            ],
        )
        self.assertEqual(rows[-1].group, "staged")

    def test_empty_groups_have_no_header(self) -> None:
        self.assertEqual(rebuild_rows([], [], VIEW_FLAT, set()), [])
        rows = rebuild_rows([], [_record("x", "A ")], VIEW_FLAT, set())
        self.assertEqual(_describe(rows), [("group", "Staged Changes:1"), ("file", "x")])

    def test_row_keys_distinguish_same_path_in_both_groups(self) -> None:
        rows = rebuild_rows([_record("x")], [_record("x", "M ")], VIEW_FLAT, set())
        keys = [row_key(row) for row in rows]

        self.assertEqual(len(keys), len(set(keys)))
        self.assertIn("file:unstaged:x", keys)
        self.assertIn("file:staged:x", keys)


class SelectionTests(unittest.TestCase):
    def setUp(self) -> None:
        self.unstaged = [_record("src/a.ts"), _record("src/b.ts", "??")]
        self.staged = [_record("lib/c.py", "M ")]

    def test_partial_group_toggle_selects_the_whole_group(self) -> None:
        selection = toggle_group_selection({"src/a.ts"}, self.unstaged)

        self.assertEqual(selection, {"src/a.ts", "src/b.ts"})

    def test_double_group_toggle_restores_original_selection(self) -> None:
        for original in (set(), {"src/a.ts"}, {"src/a.ts", "src/b.ts"}, {"lib/c.py"}):
            once = toggle_group_selection(original, self.unstaged)
            twice = toggle_group_selection(once, self.unstaged)
            if original >= {"src/a.ts", "src/b.ts"} or not original & {"src/a.ts", "src/b.ts"}:
                self.assertEqual(twice, original)
            else:
                # Partially selected groups first become fully selected, then empty.
                self.assertEqual(twice, original - {"src/a.ts", "src/b.ts"})

    def test_group_toggle_leaves_input_untouched(self) -> None:
        original = {"src/a.ts"}
        toggle_group_selection(original, self.unstaged)

        self.assertEqual(original, {"src/a.ts"})

    def test_space_on_rows_follows_row_kind(self) -> None:
        rows = rebuild_rows(self.unstaged, self.staged, VIEW_TREE, set())
        group_row, dir_row, file_row = rows[0], rows[1], rows[2]

        self.assertEqual(
            toggle_row_selection(set(), group_row, self.unstaged, self.staged),
            {"src/a.ts", "src/b.ts"},
        )
        self.assertEqual(toggle_row_selection({"lib/c.py"}, dir_row, self.unstaged, self.staged), {"lib/c.py"})
        self.assertEqual(toggle_row_selection(set(), file_row, self.unstaged, self.staged), {"src/a.ts"})
        self.assertEqual(toggle_row_selection({"x"}, None, self.unstaged, self.staged), {"x"})

    def test_staged_group_header_toggles_staged_records(self) -> None:
        rows = rebuild_rows(self.unstaged, self.staged, VIEW_FLAT, set())
        staged_header = next(row for row in rows if isinstance(row, GroupRow) and row.group == "staged")

        self.assertEqual(toggle_row_selection(set(), staged_header, self.unstaged, self.staged), {"lib/c.py"})

    def test_group_toggle_includes_files_under_collapsed_directories(self) -> None:
        rows = rebuild_rows(self.unstaged, self.staged, VIEW_TREE, {"src"})

        selection = toggle_row_selection(set(), rows[0], self.unstaged, self.staged)

        self.assertEqual(selection, {"src/a.ts", "src/b.ts"})

    def test_selection_survives_view_mode_rebuild(self) -> None:
        flat = rebuild_rows(self.unstaged, self.staged, VIEW_FLAT, set())
        selection = toggle_row_selection(set(), flat[2], self.unstaged, self.staged)

        tree = rebuild_rows(self.unstaged, self.staged, VIEW_TREE, set())
        selected_in_tree = [row.path for row in tree if isinstance(row, FileRow) and row.path in selection]

        self.assertEqual(selection, {"src/b.ts"})
        self.assertEqual(selected_in_tree, ["src/b.ts"])

    def test_smart_select_on_file_row_targets_its_group(self) -> None:
        rows = rebuild_rows(self.unstaged, self.staged, VIEW_FLAT, set())
        focused = focused_file_row(rows, 1)

        selection = toggle_smart_selection(set(), rows, focused)
        self.assertEqual(selection, {"src/a.ts", "src/b.ts"})
        self.assertEqual(toggle_smart_selection(selection, rows, focused), set())

    def test_smart_select_on_header_targets_every_visible_file(self) -> None:
        rows = rebuild_rows(self.unstaged, self.staged, VIEW_FLAT, set())

        selection = toggle_smart_selection({"src/a.ts"}, rows, rows[0])

        self.assertEqual(selection, {"src/a.ts", "src/b.ts", "lib/c.py"})

    def test_live_selection_drops_paths_missing_from_both_groups(self) -> None:
        selection = {"src/a.ts", "lib/c.py", "gone.py"}

        self.assertEqual(live_selection(selection, self.unstaged, self.staged), {"src/a.ts", "lib/c.py"})
        self.assertEqual(live_selection({"gone.py"}, self.unstaged, self.staged), set())

    def test_export_entries_follow_group_order_and_include_hidden_rows(self) -> None:
        entries = selected_export_entries({"lib/c.py", "src/b.ts"}, self.unstaged, self.staged)

        self.assertEqual(
            entries,
            [
                ExportEntry(path="src/b.ts", staged=False, status="??"),
                ExportEntry(path="lib/c.py", staged=True, status="M"),
            ],
        )
        self.assertTrue(entries[0].is_untracked)


if __name__ == "__main__":
    unittest.main()
