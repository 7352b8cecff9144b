"""UI theme definitions and selection helpers.

Themes are UI-only ANSI palettes for the panes, footer and export modal. Diff
colouring uses a separate Pygments style setting.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class UITheme:
    """Semantic ANSI palette used by renderers."""

    name: str
    divider: str
    reverse: str
    reset: str
    pane_title_active: str
    pane_title_inactive: str
    selected_count: str
    group_header: str
    dir_name: str
    check_on: str
    check_off: str
    status_added: str
    status_modified: str
    status_deleted: str
    status_other: str
    commit_hash: str
    commit_message: str
    diff_title: str
    diff_dim: str
    footer_hint: str
    modal_title: str
    modal_border: str
    modal_backdrop: str
    modal_info: str
    modal_hint: str


DEFAULT_THEME = UITheme(
    name="default",
    divider="\033[2m",
    reverse="\033[7m",
    reset="\033[0m",
    pane_title_active="\033[1;38;5;81m",
    pane_title_inactive="\033[2;38;5;250m",
    selected_count="\033[38;5;229m",
    group_header="\033[1;38;5;252m",
    dir_name="\033[1;34m",
    check_on="\033[38;5;42m",
    check_off="\033[2;38;5;250m",
    status_added="\033[32m",
    status_modified="\033[33m",
    status_deleted="\033[31m",
    status_other="\033[38;5;109m",
    commit_hash="\033[38;5;214m",
    commit_message="\033[38;5;252m",
    diff_title="\033[1;38;5;81m",
    diff_dim="\033[2;38;5;250m",
    footer_hint="\033[2;38;5;250m",
    modal_title="\033[1;38;5;45m",
    modal_border="\033[38;5;45m",
    modal_backdrop="\033[2m",
    modal_info="\033[38;5;229m",
    modal_hint="\033[2;38;5;250m",
)

OCEAN_THEME = UITheme(
    name="ocean",
    divider="\033[2;38;5;31m",
    reverse="\033[7m",
    reset="\033[0m",
    pane_title_active="\033[1;38;5;45m",
    pane_title_inactive="\033[2;38;5;110m",
    selected_count="\033[38;5;153m",
    group_header="\033[1;38;5;117m",
    dir_name="\033[1;38;5;45m",
    check_on="\033[38;5;84m",
    check_off="\033[2;38;5;110m",
    status_added="\033[38;5;84m",
    status_modified="\033[38;5;215m",
    status_deleted="\033[38;5;203m",
    status_other="\033[38;5;73m",
    commit_hash="\033[38;5;215m",
    commit_message="\033[38;5;153m",
    diff_title="\033[1;38;5;39m",
    diff_dim="\033[2;38;5;110m",
    footer_hint="\033[2;38;5;110m",
    modal_title="\033[1;38;5;39m",
    modal_border="\033[38;5;39m",
    modal_backdrop="\033[2;38;5;24m",
    modal_info="\033[38;5;153m",
    modal_hint="\033[2;38;5;110m",
)

PLAIN_THEME = UITheme(
    name="plain",
    divider="",
    reverse="",
    reset="",
    pane_title_active="",
    pane_title_inactive="",
    selected_count="",
    group_header="",
    dir_name="",
    check_on="",
    check_off="",
    status_added="",
    status_modified="",
    status_deleted="",
    status_other="",
    commit_hash="",
    commit_message="",
    diff_title="",
    diff_dim="",
    footer_hint="",
    modal_title="",
    modal_border="",
    modal_backdrop="",
    modal_info="",
    modal_hint="",
)

_THEMES: dict[str, UITheme] = {
    DEFAULT_THEME.name: DEFAULT_THEME,
    OCEAN_THEME.name: OCEAN_THEME,
}


def available_theme_names() -> tuple[str, ...]:
    """Return selectable non-plain theme names."""
    return tuple(sorted(_THEMES.keys()))


def normalize_theme_name(name: str | None) -> str:
    """Return a valid theme name, falling back to default."""
    if not name:
        return DEFAULT_THEME.name
    candidate = str(name).strip().lower()
    if candidate in _THEMES:
        return candidate
    return DEFAULT_THEME.name


def resolve_theme(name: str | None, *, no_color: bool = False) -> UITheme:
    """Return concrete theme for requested name and color mode."""
    if no_color:
        return PLAIN_THEME
    return _THEMES[normalize_theme_name(name)]


def status_color(theme: UITheme, status: str) -> str:
    """Pick the colour for a porcelain status letter."""
    if status in ("?", "??", "A"):
        return theme.status_added
    if status == "M":
        return theme.status_modified
    if status == "D":
        return theme.status_deleted
    return theme.status_other
