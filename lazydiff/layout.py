"""Dashboard geometry.

The left column stacks the files pane over the commits pane (roughly 2:1)
with a one-row key hint footer; the right column is the diff pane. The last
terminal row is the status line.
"""

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_LEFT_PERCENT = 33.0
PANE_CHROME_ROWS = 3
DIFF_CHROME_ROWS = 2


@dataclass(frozen=True)
class DashboardLayout:
    """Row and column budget for one frame."""

    width: int
    height: int
    left_width: int
    right_width: int
    files_rows: int
    commit_rows: int
    diff_rows: int

    @property
    def body_rows(self) -> int:
        return max(1, self.height - 1)


def compute_left_width(total_width: int, percent: float | None = None) -> int:
    """Initial left column width from a persisted percentage or the default split."""
    if percent is None:
        percent = DEFAULT_LEFT_PERCENT
    return clamp_left_width(total_width, int(total_width * percent / 100.0))


def clamp_left_width(total_width: int, desired_left: int) -> int:
    """Keep both columns usable; a one-column divider sits between them."""
    max_possible = max(1, total_width - 2)
    min_left = max(12, min(20, total_width - 12))
    max_left = max(min_left, total_width - 12)
    max_left = min(max_left, max_possible)
    min_left = min(min_left, max_left)
    return max(min_left, min(desired_left, max_left))


def compute_layout(width: int, height: int, left_width: int) -> DashboardLayout:
    """Split the terminal into pane viewports for the given left column width."""
    left_width = clamp_left_width(width, left_width)
    right_width = max(1, width - left_width - 1)
    body = max(PANE_CHROME_ROWS + 2, height - 1)
    list_area = body - PANE_CHROME_ROWS
    files_rows = max(1, (list_area * 2) // 3)
    commit_rows = max(1, list_area - files_rows)
    diff_rows = max(1, body - DIFF_CHROME_ROWS)
    return DashboardLayout(
        width=width,
        height=height,
        left_width=left_width,
        right_width=right_width,
        files_rows=files_rows,
        commit_rows=commit_rows,
        diff_rows=diff_rows,
    )
