"""Parsers for ``git status --porcelain -z`` and ``git log`` output."""

from __future__ import annotations

from .types import ChangeRecord, CommitRecord

LOG_FIELD_SEPARATOR = "\x1f"
LOG_FORMAT = f"%h{LOG_FIELD_SEPARATOR}%an{LOG_FIELD_SEPARATOR}%s{LOG_FIELD_SEPARATOR}%ad"
_UNSTAGED_WORKTREE_CODES = frozenset({"M", "D", "?", "A"})


def parse_porcelain_z(output: str) -> list[ChangeRecord]:
    """Parse NUL-separated porcelain v1 records into ``ChangeRecord`` values.

    Each record is ``XY path``. Renames and copies (``R``/``C`` in either
    column) are followed by a second token holding the original path; such a
    record missing that token is dropped.
    """
    if not output:
        return []
    tokens = [token for token in output.split("\0") if token]
    records: list[ChangeRecord] = []
    idx = 0
    while idx < len(tokens):
        entry = tokens[idx]
        idx += 1
        if len(entry) < 3:
            continue
        status_code = entry[:2]
        path = entry[3:]
        if "R" in status_code or "C" in status_code:
            if idx >= len(tokens):
                continue
            old_path = tokens[idx]
            idx += 1
            records.append(
                ChangeRecord(
                    path=path,
                    status_code=status_code,
                    status="R" if "R" in status_code else "C",
                    old_path=old_path,
                )
            )
            continue
        records.append(ChangeRecord(path=path, status_code=status_code, status=status_code.strip()))
    return records


def is_unstaged(record: ChangeRecord) -> bool:
    """Return whether the worktree column marks a pending unstaged change."""
    return record.status_code[1:2] in _UNSTAGED_WORKTREE_CODES


def is_staged(record: ChangeRecord) -> bool:
    """Return whether the index column holds a staged change."""
    index_code = record.status_code[:1]
    return index_code not in {" ", "?", ""}


def parse_log(output: str) -> list[CommitRecord]:
    """Parse ``git log --pretty=format:LOG_FORMAT`` output, one commit per line."""
    commits: list[CommitRecord] = []
    for line in output.strip().splitlines():
        if not line:
            continue
        parts = line.split(LOG_FIELD_SEPARATOR)
        parts += [""] * (4 - len(parts))
        commits.append(CommitRecord(hash=parts[0], author=parts[1], message=parts[2], date=parts[3]))
    return commits
