"""Scroll-window clamping shared by the list panes and the diff pane."""

from __future__ import annotations


def clamp_focus(focus: int, total: int) -> int:
    """Pull ``focus`` back inside ``[0, total - 1]`` (0 for an empty list)."""
    if total <= 0:
        return 0
    return max(0, min(focus, total - 1))


def clamp_scroll(focus: int, scroll_top: int, height: int, total: int) -> int:
    """Return a scroll offset that keeps ``focus`` inside a ``height``-row window."""
    if total <= 0:
        return 0
    height = max(1, height)
    if focus < scroll_top:
        scroll_top = focus
    elif focus >= scroll_top + height:
        scroll_top = focus - height + 1
    return max(0, scroll_top)


def reclamp(focus: int, scroll_top: int, height: int, total: int) -> tuple[int, int]:
    """Re-clamp focus to the row count, then apply the scroll rule."""
    focus = clamp_focus(focus, total)
    return focus, clamp_scroll(focus, scroll_top, height, total)


def max_text_scroll(height: int, line_count: int) -> int:
    return max(0, line_count - max(1, height))


def clamp_text_scroll(scroll_top: int, height: int, line_count: int) -> int:
    """Bound a text offset to ``[0, line_count - height]``."""
    return max(0, min(scroll_top, max_text_scroll(height, line_count)))


def page_text_scroll(scroll_top: int, direction: int, height: int, line_count: int) -> int:
    """Move a text offset by one page (``height`` lines) in ``direction``."""
    step = max(1, height)
    return clamp_text_scroll(scroll_top + (step if direction > 0 else -step), height, line_count)
