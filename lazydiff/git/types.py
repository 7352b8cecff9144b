"""Record datatypes produced by the git boundary."""

from __future__ import annotations

from dataclasses import dataclass

UNTRACKED_STATUSES = frozenset({"?", "??"})
GROUP_UNSTAGED = "unstaged"
GROUP_STAGED = "staged"


@dataclass(frozen=True)
class ChangeRecord:
    """One changed path reported by ``git status``.

    ``status_code`` is the raw two-character ``XY`` code; ``status`` is its
    trimmed display label (``"R"`` for renames, which also carry ``old_path``).
    """

    path: str
    status_code: str
    status: str
    old_path: str | None = None

    @property
    def is_untracked(self) -> bool:
        return self.status in UNTRACKED_STATUSES


@dataclass(frozen=True)
class CommitRecord:
    """One entry of ``git log`` history."""

    hash: str
    author: str
    message: str
    date: str


@dataclass(frozen=True)
class ExportEntry:
    """Selected path tagged with the group it was selected from."""

    path: str
    staged: bool
    status: str

    @property
    def is_untracked(self) -> bool:
        return self.status in UNTRACKED_STATUSES
