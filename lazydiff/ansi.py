"""ANSI-aware width measurement and cell fitting for pane rendering."""

from __future__ import annotations

import re
import unicodedata

ANSI_ESCAPE_RE = re.compile(r"\x1b\[[0-9;?]*[ -/]*[@-~]")
TAB_STOP = 8


def char_display_width(ch: str, col: int) -> int:
    """Return terminal column width for one character at visual column ``col``.

    Tabs expand to the next 8-column stop, combining marks consume no columns,
    and East Asian wide/fullwidth characters consume two.
    """
    if ch == "\t":
        return TAB_STOP - (col % TAB_STOP)
    if unicodedata.combining(ch):
        return 0
    if unicodedata.east_asian_width(ch) in {"W", "F"}:
        return 2
    return 1


def strip_ansi(text: str) -> str:
    return ANSI_ESCAPE_RE.sub("", text)


def display_width(text: str) -> int:
    """Columns occupied by ``text`` once escapes are removed and tabs expanded."""
    col = 0
    for ch in strip_ansi(text):
        col += char_display_width(ch, col)
    return col


def clip_ansi_line(text: str, max_cols: int) -> str:
    """Trim a styled line to at most ``max_cols`` display columns.

    Escape sequences are kept and do not count toward width. Tabs become
    spaces so clipping matches what the terminal shows.
    """
    if max_cols <= 0 or not text:
        return ""

    out: list[str] = []
    col = 0
    i = 0
    n = len(text)
    while i < n and col < max_cols:
        if text[i] == "\x1b":
            match = ANSI_ESCAPE_RE.match(text, i)
            if match:
                out.append(match.group(0))
                i = match.end()
                continue
        ch = text[i]
        w = char_display_width(ch, col)
        if col + w > max_cols:
            if ch == "\t":
                out.append(" " * (max_cols - col))
            break
        out.append(" " * w if ch == "\t" else ch)
        col += w
        i += 1

    return "".join(out)


def fit_ansi_cell(text: str, width: int, reset: str = "\033[0m") -> str:
    """Clip ``text`` to ``width`` columns and pad the rest with spaces.

    ``reset`` is emitted after styled content so colours never bleed into the
    neighbouring pane.
    """
    if width <= 0:
        return ""
    clipped = clip_ansi_line(text, width)
    pad = " " * max(0, width - display_width(clipped))
    if reset and ANSI_ESCAPE_RE.search(clipped):
        return clipped + reset + pad
    return clipped + pad
