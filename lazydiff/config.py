"""Persistent JSON config helpers.

Stores the pane split and the last file view mode, and reads the history limit
and UI theme. Malformed or missing config falls back to defaults.
"""

from __future__ import annotations

import json
from pathlib import Path

from platformdirs import user_config_dir

from .list_model import VIEW_MODES

APP_NAME = "lazydiff"
CONFIG_FILENAME = "config.json"
DEFAULT_CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME
CONFIG_PATH = DEFAULT_CONFIG_PATH
DEFAULT_MAX_COMMITS = 100


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict[str, object]) -> None:
    """Persist config data as pretty-printed JSON, ignoring write failures."""
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except (OSError, TypeError, ValueError):
        pass


def _update(key: str, value: object) -> None:
    config = load_config()
    config[key] = value
    save_config(config)


def load_left_pane_percent() -> float | None:
    """Read the left column width as a percentage in the open interval (0, 100)."""
    value = load_config().get("left_pane_percent")
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if value <= 0 or value >= 100:
        return None
    return float(value)


def save_left_pane_percent(total_width: int, left_width: int) -> None:
    """Store the left column width clamped to ``[1.0, 99.0]`` percent."""
    if total_width <= 0:
        return
    percent = max(1.0, min(99.0, (left_width / total_width) * 100.0))
    _update("left_pane_percent", round(percent, 2))


def load_view_mode() -> str | None:
    value = load_config().get("view_mode")
    return value if isinstance(value, str) and value in VIEW_MODES else None


def save_view_mode(view_mode: str) -> None:
    if view_mode not in VIEW_MODES:
        return
    _update("view_mode", view_mode)


def load_max_commits() -> int:
    """Return the history limit; booleans and non-positive values fall back to the default."""
    value = load_config().get("max_commits")
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        return DEFAULT_MAX_COMMITS
    return value


def load_theme_name() -> str | None:
    """Load persisted UI theme name, returning ``None`` when unset/invalid."""
    value = load_config().get("theme")
    if not isinstance(value, str):
        return None
    stripped = value.strip()
    return stripped if stripped else None
