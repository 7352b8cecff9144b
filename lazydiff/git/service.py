"""Subprocess-backed git collaborator.

Every read and write the dashboard needs from git goes through ``GitService``.
It is constructed once at startup and injected into the controller and the
export orchestrator, so tests can substitute a fake with the same methods.
"""

from __future__ import annotations

import logging
import os
import subprocess
from collections.abc import Iterable, Sequence
from pathlib import Path

from ..errors import GitError
from .porcelain import LOG_FORMAT, is_staged, is_unstaged, parse_log, parse_porcelain_z
from .types import ChangeRecord, CommitRecord, ExportEntry

LOG = logging.getLogger(__name__)

COMMIT_BANNER_RULE = "=" * 67
DEFAULT_HISTORY_LIMIT = 100
# ``git diff --no-index`` exits 1 when the files differ.
_NO_INDEX_OK_CODES = (0, 1)


def commit_banner(hash: str, message: str) -> str:
    """Return the header block written above each exported commit diff."""
    return "\n".join([COMMIT_BANNER_RULE, f"Commit: {hash} - {message}", COMMIT_BANNER_RULE, ""])


def _write_text(output_path: Path, content: str) -> None:
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(content, encoding="utf-8")


class GitService:
    """Run git commands inside one working directory."""

    def __init__(self, cwd: Path, git_bin: str = "git", timeout_seconds: float | None = None) -> None:
        self.cwd = Path(cwd)
        self.git_bin = git_bin
        self.timeout_seconds = timeout_seconds

    def _run_git(self, args: Sequence[str], ok_codes: Iterable[int] = (0,)) -> str:
        """Run one git command and return stdout, raising ``GitError`` on failure."""
        command = [self.git_bin, *args]
        LOG.debug("running %s in %s", command, self.cwd)
        try:
            proc = subprocess.run(
                command,
                cwd=self.cwd,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                encoding="utf-8",
                errors="replace",
                check=False,
                timeout=self.timeout_seconds,
            )
        except (OSError, subprocess.SubprocessError) as exc:
            raise GitError(f"git {args[0]} failed: {exc}") from exc
        if proc.returncode not in tuple(ok_codes):
            detail = proc.stderr.strip() or f"exit code {proc.returncode}"
            raise GitError(f"git {args[0]} failed: {detail}")
        return proc.stdout

    def repository_root(self) -> Path | None:
        """Return the enclosing work-tree root, or ``None`` outside a repository."""
        try:
            out = self._run_git(["rev-parse", "--show-toplevel"])
        except GitError:
            return None
        root = out.strip()
        return Path(root) if root else None

    def _status_records(self) -> list[ChangeRecord]:
        return parse_porcelain_z(self._run_git(["status", "--porcelain", "-z", "-u"]))

    def list_unstaged(self) -> list[ChangeRecord]:
        """Return records with worktree changes, untracked files included."""
        return [record for record in self._status_records() if is_unstaged(record)]

    def list_staged(self) -> list[ChangeRecord]:
        """Return records with index changes."""
        return [record for record in self._status_records() if is_staged(record)]

    def list_changes(self) -> tuple[list[ChangeRecord], list[ChangeRecord]]:
        """Return ``(unstaged, staged)`` from a single status call."""
        records = self._status_records()
        return (
            [record for record in records if is_unstaged(record)],
            [record for record in records if is_staged(record)],
        )

    def list_all_files(self) -> list[str]:
        """Return tracked plus untracked, non-ignored files, de-duplicated and sorted."""
        tracked = self._run_git(["ls-files"])
        untracked = self._run_git(["ls-files", "--others", "--exclude-standard"])
        files = {line for line in (tracked + "\n" + untracked).splitlines() if line}
        return sorted(files)

    def list_history(self, max_count: int = DEFAULT_HISTORY_LIMIT) -> list[CommitRecord]:
        try:
            out = self._run_git(
                ["log", f"--max-count={max_count}", f"--pretty=format:{LOG_FORMAT}", "--date=short"]
            )
        except GitError:
            # A repository without commits has no history to show.
            if self._run_git(["rev-parse", "--is-inside-work-tree"]).strip() == "true":
                return []
            raise
        return parse_log(out)

    def get_file_diff(self, path: str, staged: bool, status: str = "") -> str:
        """Return unified diff text for one path.

        Untracked files are diffed against ``/dev/null`` so they render as new
        files.
        """
        if not staged and status in {"?", "??"}:
            return self._run_git(
                ["diff", "--no-color", "--no-index", "--", os.devnull, path],
                ok_codes=_NO_INDEX_OK_CODES,
            )
        args = ["diff", "--no-color"]
        if staged:
            args.append("--cached")
        return self._run_git([*args, "--", path])

    def get_commit_diff(self, hash: str) -> str:
        return self._run_git(["show", "--no-color", hash])

    def write_file_diff(self, path: str, staged: bool, status: str, output_path: Path) -> None:
        _write_text(output_path, self.get_file_diff(path, staged, status))

    def write_multi_diff(self, entries: Sequence[ExportEntry], output_path: Path) -> None:
        """Write the combined diff of ``entries``.

        Unstaged tracked paths are diffed in one batch, staged paths in a
        second, and untracked paths one at a time. Non-empty parts are joined
        with a blank line, in that order. A failing part is replaced by an
        inline error note so the rest of the export still lands.
        """
        if not entries:
            _write_text(output_path, "")
            return

        untracked = [entry.path for entry in entries if entry.is_untracked]
        staged = [entry.path for entry in entries if not entry.is_untracked and entry.staged]
        unstaged = [entry.path for entry in entries if not entry.is_untracked and not entry.staged]

        parts: list[str] = []
        if unstaged:
            try:
                content = self._run_git(["diff", "--no-color", "--", *unstaged])
            except GitError as exc:
                LOG.warning("unstaged export failed: %s", exc)
                content = f"(Error exporting unstaged files: {exc})"
            if content:
                parts.append(content)
        if staged:
            try:
                content = self._run_git(["diff", "--no-color", "--cached", "--", *staged])
            except GitError as exc:
                LOG.warning("staged export failed: %s", exc)
                content = f"(Error exporting staged files: {exc})"
            if content:
                parts.append(content)
        for path in untracked:
            try:
                content = self.get_file_diff(path, staged=False, status="??")
            except GitError as exc:
                LOG.warning("untracked export failed for %s: %s", path, exc)
                content = f"(Error exporting untracked file {path}: {exc})"
            if content:
                parts.append(content)

        _write_text(output_path, "\n\n".join(parts))

    def write_commit_diff(self, commit: CommitRecord, output_path: Path) -> None:
        _write_text(output_path, commit_banner(commit.hash, commit.message) + self.get_commit_diff(commit.hash))

    def write_multi_commit(self, commits: Sequence[CommitRecord], output_path: Path) -> None:
        """Write every commit in ``commits`` with its banner, each block followed by a blank line."""
        blocks = [
            commit_banner(commit.hash, commit.message) + self.get_commit_diff(commit.hash) + "\n\n"
            for commit in commits
        ]
        _write_text(output_path, "".join(blocks))


__all__ = [
    "COMMIT_BANNER_RULE",
    "DEFAULT_HISTORY_LIMIT",
    "GitService",
    "commit_banner",
]
