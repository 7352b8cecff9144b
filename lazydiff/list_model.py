"""Display rows and selection operations for the files pane.

Rows are a closed union of ``GroupRow``, ``DirectoryRow`` and ``FileRow``.
They are recomputed from the loaded change records on every change, and every
consumer matches all three kinds explicitly.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence, Set
from dataclasses import dataclass
from typing import Union

from .git.types import GROUP_STAGED, GROUP_UNSTAGED, ChangeRecord, ExportEntry
from .tree_model import TreeNode, build_change_tree, flatten_tree

VIEW_FLAT = "flat"
VIEW_TREE = "tree"
VIEW_MODES = (VIEW_FLAT, VIEW_TREE)

GROUP_LABELS: dict[str, str] = {
    GROUP_UNSTAGED: "Changes",
    GROUP_STAGED: "Staged Changes",
}


@dataclass(frozen=True)
class GroupRow:
    """Header row for one change group."""

    label: str
    count: int
    group: str


@dataclass(frozen=True)
class DirectoryRow:
    """Directory row shown in tree mode."""

    node: TreeNode


@dataclass(frozen=True)
class FileRow:
    """One changed file; ``node`` is set in tree mode."""

    record: ChangeRecord
    group: str
    node: TreeNode | None = None

    @property
    def path(self) -> str:
        return self.record.path


DisplayRow = Union[GroupRow, DirectoryRow, FileRow]


def _group_rows(records: Sequence[ChangeRecord], group: str, view_mode: str, collapsed: Set[str]) -> list[DisplayRow]:
    if not records:
        return []
    rows: list[DisplayRow] = [GroupRow(label=GROUP_LABELS[group], count=len(records), group=group)]
    if view_mode != VIEW_TREE:
        rows.extend(FileRow(record=record, group=group) for record in records)
        return rows
    for node in flatten_tree(build_change_tree(records, group), collapsed):
        if node.is_dir:
            rows.append(DirectoryRow(node=node))
        elif node.record is not None:
            rows.append(FileRow(record=node.record, group=group, node=node))
    return rows


def rebuild_rows(
    unstaged: Sequence[ChangeRecord],
    staged: Sequence[ChangeRecord],
    view_mode: str,
    collapsed: Set[str],
) -> list[DisplayRow]:
    """Return the visible row list: unstaged group first, then staged.

    Empty groups contribute no header.
    """
    return [
        *_group_rows(unstaged, GROUP_UNSTAGED, view_mode, collapsed),
        *_group_rows(staged, GROUP_STAGED, view_mode, collapsed),
    ]


def toggle_selection(selection: Set[str], path: str) -> set[str]:
    """Return ``selection`` with ``path`` membership flipped."""
    updated = set(selection)
    if path in updated:
        updated.discard(path)
    else:
        updated.add(path)
    return updated


def toggle_paths(selection: Set[str], paths: Iterable[str]) -> set[str]:
    """Deselect all of ``paths`` when every one is selected, otherwise select all."""
    targets = list(paths)
    updated = set(selection)
    if all(path in updated for path in targets):
        updated.difference_update(targets)
    else:
        updated.update(targets)
    return updated


def toggle_group_selection(selection: Set[str], records: Iterable[ChangeRecord]) -> set[str]:
    """Toggle a whole group; a partially selected group counts as not selected."""
    return toggle_paths(selection, (record.path for record in records))


def records_for_group(group: str, unstaged: Sequence[ChangeRecord], staged: Sequence[ChangeRecord]) -> Sequence[ChangeRecord]:
    if group == GROUP_STAGED:
        return staged
    return unstaged


def toggle_row_selection(
    selection: Set[str],
    row: DisplayRow | None,
    unstaged: Sequence[ChangeRecord],
    staged: Sequence[ChangeRecord],
) -> set[str]:
    """Apply the space-key selection rule for ``row``.

    Group headers toggle every record of their group, including files hidden
    under collapsed directories. Directory rows carry no selection state.
    """
    if row is None:
        return set(selection)
    if isinstance(row, GroupRow):
        return toggle_group_selection(selection, records_for_group(row.group, unstaged, staged))
    if isinstance(row, DirectoryRow):
        return set(selection)
    if isinstance(row, FileRow):
        return toggle_selection(selection, row.path)
    raise TypeError(f"unknown row type: {type(row).__name__}")


def toggle_smart_selection(selection: Set[str], rows: Sequence[DisplayRow], focused: DisplayRow | None) -> set[str]:
    """Select-all shortcut over visible file rows.

    On a file row only that row's group is toggled; anywhere else every
    visible file row is.
    """
    if isinstance(focused, FileRow):
        group = focused.group
        targets = [row.path for row in rows if isinstance(row, FileRow) and row.group == group]
    elif focused is None or isinstance(focused, (GroupRow, DirectoryRow)):
        targets = [row.path for row in rows if isinstance(row, FileRow)]
    else:
        raise TypeError(f"unknown row type: {type(focused).__name__}")
    return toggle_paths(selection, targets)


def selected_export_entries(
    selection: Set[str],
    unstaged: Sequence[ChangeRecord],
    staged: Sequence[ChangeRecord],
) -> list[ExportEntry]:
    """Return selected paths tagged with group and status, unstaged first.

    Built from the full record lists so files under collapsed directories are
    still exported. A path changed in both groups yields one entry per group.
    """
    entries = [
        ExportEntry(path=record.path, staged=False, status=record.status)
        for record in unstaged
        if record.path in selection
    ]
    entries.extend(
        ExportEntry(path=record.path, staged=True, status=record.status)
        for record in staged
        if record.path in selection
    )
    return entries


def live_selection(
    selection: Set[str],
    unstaged: Sequence[ChangeRecord],
    staged: Sequence[ChangeRecord],
) -> set[str]:
    """Selected paths still present in either group."""
    present = {record.path for record in unstaged}
    present.update(record.path for record in staged)
    return set(selection) & present


def row_at(rows: Sequence[DisplayRow], index: int) -> DisplayRow | None:
    if 0 <= index < len(rows):
        return rows[index]
    return None


def focused_file_row(rows: Sequence[DisplayRow], index: int) -> FileRow | None:
    row = row_at(rows, index)
    return row if isinstance(row, FileRow) else None


def row_key(row: DisplayRow) -> str:
    """Return a stable identity string for ``row`` within one build."""
    if isinstance(row, GroupRow):
        return f"group:{row.group}"
    if isinstance(row, DirectoryRow):
        return f"dir:{row.node.path}"
    if isinstance(row, FileRow):
        return f"file:{row.group}:{row.path}"
    raise TypeError(f"unknown row type: {type(row).__name__}")


__all__ = [
    "DirectoryRow",
    "DisplayRow",
    "FileRow",
    "GROUP_LABELS",
    "GroupRow",
    "VIEW_FLAT",
    "VIEW_MODES",
    "VIEW_TREE",
    "focused_file_row",
    "rebuild_rows",
    "records_for_group",
    "row_at",
    "row_key",
    "selected_export_entries",
    "toggle_group_selection",
    "toggle_paths",
    "toggle_row_selection",
    "toggle_selection",
    "toggle_smart_selection",
]
