"""Turn selections plus a user path into export writes.

Every path-taking export goes through ``resolve_export_path`` so the
existing-directory and no-suffix rules behave the same for each kind. The git
collaborator is injected; failures surface as ``ExportError``.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

from ..errors import ExportError, GitError
from ..git.types import CommitRecord, ExportEntry
from .code_dump import SUMMARY_FILENAME, build_code_dump, dump_summary, write_code_dump
from .overview import build_overview
from .paths import (
    SINGLE_EXPORT_NAME,
    commit_file_name,
    display_path,
    resolve_dump_dir,
    resolve_export_path,
    timestamped_name,
)

LOG = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExportResult:
    """Where an export landed and the status line describing it."""

    path: Path
    message: str


class ExportOrchestrator:
    """Run exports against an injected git service inside ``base_dir``."""

    def __init__(self, git, base_dir: Path, clock: Callable[[], datetime] = datetime.now) -> None:
        self.git = git
        self.base_dir = Path(base_dir)
        self._clock = clock

    def _guard(self, action: Callable[[], ExportResult]) -> ExportResult:
        try:
            result = action()
        except (GitError, OSError) as exc:
            LOG.warning("export failed: %s", exc)
            raise ExportError(str(exc)) from exc
        LOG.info("%s", result.message)
        return result

    def export_single(self, path: str, staged: bool, status: str) -> ExportResult:
        """Write one file's diff to ``./diff.txt``, overwriting it."""

        def run() -> ExportResult:
            target = resolve_export_path(SINGLE_EXPORT_NAME, self.base_dir, SINGLE_EXPORT_NAME)
            self.git.write_file_diff(path, staged, status, target)
            return ExportResult(target, f"✓ Exported to {display_path(target, self.base_dir)}")

        return self._guard(run)

    def export_multi(self, entries: Sequence[ExportEntry], raw_path: str) -> ExportResult:
        def run() -> ExportResult:
            target = resolve_export_path(raw_path, self.base_dir, timestamped_name("diff", self._clock()))
            self.git.write_multi_diff(entries, target)
            return ExportResult(target, f"✓ Exported {len(entries)} file(s) to {target.name}")

        return self._guard(run)

    def export_commit(self, commit: CommitRecord, raw_path: str) -> ExportResult:
        def run() -> ExportResult:
            target = resolve_export_path(raw_path, self.base_dir, commit_file_name(commit.hash, self._clock()))
            self.git.write_commit_diff(commit, target)
            return ExportResult(target, f"✓ Exported {commit.hash} to {display_path(target, self.base_dir)}")

        return self._guard(run)

    def export_commit_set(self, commits: Sequence[CommitRecord], raw_path: str) -> ExportResult:
        def run() -> ExportResult:
            target = resolve_export_path(raw_path, self.base_dir, timestamped_name("commits", self._clock()))
            self.git.write_multi_commit(commits, target)
            return ExportResult(
                target,
                f"✓ Exported {len(commits)} commits to {display_path(target, self.base_dir)}",
            )

        return self._guard(run)

    def export_overview(self, raw_path: str) -> ExportResult:
        def run() -> ExportResult:
            target = resolve_export_path(raw_path, self.base_dir, timestamped_name("files_overview", self._clock()))
            target.write_text(build_overview(self.git.list_all_files(), self.base_dir), encoding="utf-8")
            return ExportResult(target, f"✓ Overview exported to {target.name}")

        return self._guard(run)

    def export_code_dump(self, raw_path: str, layout: str) -> ExportResult:
        def run() -> ExportResult:
            now = self._clock()
            output_dir = resolve_dump_dir(raw_path, self.base_dir, now)
            outputs = build_code_dump(self.git.list_all_files(), self.base_dir, layout, now)
            count = write_code_dump(outputs, output_dir)
            (output_dir / SUMMARY_FILENAME).write_text(
                dump_summary(outputs, output_dir, self.base_dir, layout, now),
                encoding="utf-8",
            )
            return ExportResult(output_dir, f"✓ Dumped {count} files to {display_path(output_dir, self.base_dir)}/")

        return self._guard(run)


__all__ = ["ExportOrchestrator", "ExportResult"]
