"""Single-line edit buffer operations for export path entry.

Each helper takes ``(text, cursor)`` and returns the updated pair. The cursor
always ends up inside ``[0, len(text)]``, even when called with an out-of-range
position.
"""

from __future__ import annotations


def _bounded(text: str, cursor: int) -> int:
    return max(0, min(cursor, len(text)))


def insert_text(text: str, cursor: int, inserted: str) -> tuple[str, int]:
    cursor = _bounded(text, cursor)
    return text[:cursor] + inserted + text[cursor:], cursor + len(inserted)


def delete_before(text: str, cursor: int) -> tuple[str, int]:
    """Backspace: remove the character left of the cursor."""
    cursor = _bounded(text, cursor)
    if cursor == 0:
        return text, 0
    return text[: cursor - 1] + text[cursor:], cursor - 1


def delete_at(text: str, cursor: int) -> tuple[str, int]:
    """Delete: remove the character under the cursor."""
    cursor = _bounded(text, cursor)
    return text[:cursor] + text[cursor + 1 :], cursor


def move_cursor(text: str, cursor: int, delta: int) -> tuple[str, int]:
    return text, _bounded(text, cursor + delta)


def move_home(text: str, cursor: int) -> tuple[str, int]:
    return text, 0


def move_end(text: str, cursor: int) -> tuple[str, int]:
    return text, len(text)


def clear(text: str, cursor: int) -> tuple[str, int]:
    return "", 0


def single_line(text: str) -> str:
    """Strip every line-break so pasted text fits a one-line path."""
    return text.replace("\r", "").replace("\n", "")
