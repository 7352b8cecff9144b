"""Export path-entry keyboard handling.

While one of the export modes is active every key edits the one-line path
buffer; nothing reaches the normal-mode bindings.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from ..state import (
    DUMP_LAYOUT_FLAT,
    DUMP_LAYOUT_TREE,
    MODE_EXPORT_CODE_DUMP,
    MODE_NORMAL,
    BrowserState,
)
from . import path_buffer
from .key_registry import KeyComboBinding, KeyComboRegistry


@dataclass(frozen=True)
class PathEntryKeyContext:
    """State and bound operations required for path-entry key handling."""

    state: BrowserState
    confirm_export: Callable[[str, str], None]
    request_paste: Callable[[], None]


def is_text_key(key: str) -> bool:
    """Return whether ``key`` is literal text rather than a named key token."""
    return len(key) == 1 and key.isprintable()


def handle_path_entry_key(key: str, context: PathEntryKeyContext) -> None:
    """Apply one key to the path buffer, leaving the mode on cancel/confirm."""
    state = context.state

    def edit(operation: Callable[..., tuple[str, int]], *args) -> bool:
        state.path_buffer, state.cursor_pos = operation(state.path_buffer, state.cursor_pos, *args)
        return False

    def leave() -> None:
        state.input_mode = MODE_NORMAL
        state.path_buffer = ""
        state.cursor_pos = 0

    def cancel_action() -> bool:
        leave()
        return False

    def confirm_action() -> bool:
        mode = state.input_mode
        raw = state.path_buffer.strip()
        leave()
        context.confirm_export(mode, raw)
        return False

    def toggle_layout_action() -> bool:
        if state.input_mode == MODE_EXPORT_CODE_DUMP:
            state.dump_layout = DUMP_LAYOUT_FLAT if state.dump_layout == DUMP_LAYOUT_TREE else DUMP_LAYOUT_TREE
        return False

    def paste_action() -> bool:
        context.request_paste()
        return False

    bindings = KeyComboRegistry().register_bindings(
        KeyComboBinding(("ESC",), cancel_action),
        KeyComboBinding(("ENTER",), confirm_action),
        KeyComboBinding(("TAB",), toggle_layout_action),
        KeyComboBinding(("BACKSPACE",), lambda: edit(path_buffer.delete_before)),
        KeyComboBinding(("DELETE",), lambda: edit(path_buffer.delete_at)),
        KeyComboBinding(("LEFT",), lambda: edit(path_buffer.move_cursor, -1)),
        KeyComboBinding(("RIGHT",), lambda: edit(path_buffer.move_cursor, 1)),
        KeyComboBinding(("HOME",), lambda: edit(path_buffer.move_home)),
        KeyComboBinding(("END",), lambda: edit(path_buffer.move_end)),
        KeyComboBinding(("CTRL_U",), lambda: edit(path_buffer.clear)),
        KeyComboBinding(("CTRL_V",), paste_action),
    )

    state.dirty = True
    if bindings.dispatch(key) is not None:
        return
    if is_text_key(key):
        edit(path_buffer.insert_text, key)
