"""Normal-mode keyboard handling."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from ..state import (
    MODE_EXPORT_CODE_DUMP,
    MODE_EXPORT_DIFF,
    MODE_EXPORT_OVERVIEW,
    PANE_COMMITS,
    PANE_FILES,
    BrowserState,
)
from .key_registry import KeyComboBinding, KeyComboRegistry


@dataclass(frozen=True)
class NormalKeyContext:
    """State and bound operations required for normal-mode key handling."""

    state: BrowserState
    move_focus: Callable[[int], None]
    jump_focus: Callable[[bool], None]
    switch_pane: Callable[[str | None], None]
    scroll_diff: Callable[[int], None]
    toggle_view_mode: Callable[[], None]
    toggle_focused_selection: Callable[[], None]
    toggle_focused_directory: Callable[[], None]
    smart_select: Callable[[], None]
    begin_path_entry: Callable[[str], None]
    quick_export: Callable[[], None]
    quick_overview: Callable[[], None]
    refresh: Callable[[], None]


class NormalKeyHandler:
    """Reusable normal-mode handler with bound runtime dependencies."""

    def __init__(self, context: NormalKeyContext) -> None:
        self.context = context

    def handle(self, key: str) -> bool:
        """Handle one normal-mode key and return ``True`` when app should quit."""
        return handle_normal_key(key, self.context)


def handle_normal_key(key: str, context: NormalKeyContext) -> bool:
    """Handle one normal-mode key and return ``True`` when app should quit."""
    state = context.state

    def run(action: Callable[..., None], *args) -> Callable[[], bool]:
        def bound() -> bool:
            action(*args)
            state.dirty = True
            return False

        return bound

    bindings = KeyComboRegistry().register_bindings(
        KeyComboBinding(("q",), lambda: True),
        KeyComboBinding(("TAB",), run(context.switch_pane, None)),
        KeyComboBinding(("LEFT",), run(context.switch_pane, PANE_FILES)),
        KeyComboBinding(("RIGHT",), run(context.switch_pane, PANE_COMMITS)),
        KeyComboBinding(("UP", "k"), run(context.move_focus, -1)),
        KeyComboBinding(("DOWN", "j"), run(context.move_focus, 1)),
        KeyComboBinding(("HOME", "g"), run(context.jump_focus, False)),
        KeyComboBinding(("END", "G"), run(context.jump_focus, True)),
        KeyComboBinding(("PGUP",), run(context.scroll_diff, -1)),
        KeyComboBinding(("PGDN",), run(context.scroll_diff, 1)),
        KeyComboBinding(("/",), run(context.toggle_view_mode)),
        KeyComboBinding((" ",), run(context.toggle_focused_selection)),
        KeyComboBinding(("ENTER",), run(context.toggle_focused_directory)),
        KeyComboBinding(("a",), run(context.smart_select)),
        KeyComboBinding(("E",), run(context.begin_path_entry, MODE_EXPORT_DIFF)),
        KeyComboBinding(("F",), run(context.begin_path_entry, MODE_EXPORT_OVERVIEW)),
        KeyComboBinding(("D",), run(context.begin_path_entry, MODE_EXPORT_CODE_DUMP)),
        KeyComboBinding(("e",), run(context.quick_export)),
        KeyComboBinding(("f",), run(context.quick_overview)),
        KeyComboBinding(("r",), run(context.refresh)),
    )
    handled = bindings.dispatch(key)
    return bool(handled)
