"""Command-line front door for lazydiff.

Parses CLI options, checks that the target is inside a git work tree, sets
up logging, and dispatches into the interactive dashboard.
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from .git import GitService
from .logging_utils import configure_logging
from .runtime import run_dashboard
from .ui_theme import available_theme_names

LOG = logging.getLogger(__name__)


def _positive_int(value: str) -> int:
    """argparse type for positive integer values."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be >= 1")
    return parsed


def _percent(value: str) -> float:
    """argparse type for a percentage strictly between 0 and 100."""
    try:
        parsed = float(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid number: {value!r}") from exc
    if not 0 < parsed < 100:
        raise argparse.ArgumentTypeError("value must be between 0 and 100")
    return parsed


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lazydiff",
        description="Browse working-tree changes and commit history, and export diffs to files.",
    )
    parser.add_argument("path", nargs="?", default=None, help="Path inside a git repository. Defaults to current directory.")
    parser.add_argument(
        "--theme",
        default=None,
        help=f"UI theme name ({', '.join(available_theme_names())}).",
    )
    parser.add_argument("--style", default="monokai", help="Pygments style name used to colour diffs.")
    parser.add_argument("--no-color", action="store_true", help="Disable color output even on TTY.")
    parser.add_argument(
        "--max-commits",
        type=_positive_int,
        default=None,
        help="Number of history entries to load (default: config value or 100).",
    )
    parser.add_argument(
        "--left-pane-percent",
        type=_percent,
        default=None,
        help="Width of the files/commits column as a percentage of the terminal.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Write a log file; repeat for debug output.",
    )
    parser.add_argument("--log-file", type=Path, default=None, help="Log file path (implies logging at -v level).")
    return parser


def main(default_path: Path | None = None, argv: list[str] | None = None) -> None:
    """Parse CLI arguments and launch the dashboard.

    ``default_path`` is primarily for tests; when omitted the current working
    directory is used.
    """
    args = build_parser().parse_args(argv)

    if default_path is None:
        default_path = Path.cwd()
    path = Path(args.path or default_path)
    if not path.exists():
        raise SystemExit(f"Path not found: {path}")

    start = path if path.is_dir() else path.parent
    repo_root = GitService(start).repository_root()
    if repo_root is None:
        raise SystemExit(f"Not a git repository: {path}")

    log_path = configure_logging(args.verbose, args.log_file)
    if log_path is not None:
        LOG.info("logging to %s", log_path)

    run_dashboard(
        repo_root,
        style=args.style,
        no_color=args.no_color,
        theme_name=args.theme,
        max_commits=args.max_commits,
        left_pane_percent=args.left_pane_percent,
    )
