"""Diff text sanitization and Pygments colouring for the diff pane."""

from __future__ import annotations

import re

from pygments import highlight
from pygments.formatters import Terminal256Formatter
from pygments.lexers import DiffLexer
from pygments.styles import get_style_by_name
from pygments.util import ClassNotFound

DEFAULT_STYLE = "monokai"

_CONTROL_RE = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f-\x9f]")

_FORMATTERS: dict[str, Terminal256Formatter] = {}
_VALID_STYLES: set[str] = set()
_INVALID_STYLES: set[str] = set()


def sanitize_terminal_text(source: str) -> str:
    """Escape terminal control bytes to avoid side effects (bell, cursor moves, etc.)."""
    if _CONTROL_RE.search(source) is None:
        return source

    out: list[str] = []
    for ch in source:
        code = ord(ch)
        if ch in {"\n", "\r", "\t"}:
            out.append(ch)
            continue
        # C0 controls + DEL + C1 controls.
        if code < 32 or code == 127 or 0x80 <= code <= 0x9F:
            out.append(f"\\x{code:02x}")
            continue
        out.append(ch)
    return "".join(out)


def normalize_style(style: str | None) -> str:
    """Return ``style`` when Pygments knows it, else the default style."""
    if not style:
        return DEFAULT_STYLE
    if style in _VALID_STYLES:
        return style
    if style in _INVALID_STYLES:
        return DEFAULT_STYLE
    try:
        get_style_by_name(style)
    except ClassNotFound:
        _INVALID_STYLES.add(style)
        return DEFAULT_STYLE
    _VALID_STYLES.add(style)
    return style


def _formatter_for_style(style: str) -> Terminal256Formatter:
    formatter = _FORMATTERS.get(style)
    if formatter is None:
        formatter = Terminal256Formatter(style=style)
        _FORMATTERS[style] = formatter
    return formatter


def plain_diff_lines(text: str) -> list[str]:
    """Split sanitized diff text into display lines without colour."""
    if not text:
        return []
    lines = sanitize_terminal_text(text).split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return [line.rstrip("\r") for line in lines]


def format_diff_lines(text: str, style: str = DEFAULT_STYLE, no_color: bool = False) -> list[str]:
    """Return one styled display line per diff line.

    Falls back to plain lines when colour is off or when the highlighted output
    does not line up with the input.
    """
    plain = plain_diff_lines(text)
    if no_color or not plain:
        return plain

    lexer = DiffLexer(stripnl=False, ensurenl=False)
    rendered = highlight("\n".join(plain), lexer, _formatter_for_style(normalize_style(style)))
    colored = rendered.split("\n")
    if len(colored) > len(plain) and colored[-1] == "":
        colored.pop()
    if len(colored) != len(plain):
        return plain
    return colored
