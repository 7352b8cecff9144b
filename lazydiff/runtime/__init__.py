"""Public runtime orchestration entry points.

This package groups the dashboard bootstrap (`run_dashboard`) and the
lower-level loop, controller, and background scheduler used by tests.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .loop import RuntimeLoopCallbacks


def run_dashboard(*args, **kwargs):
    """Lazily import dashboard entrypoint to avoid heavy runtime bootstrap on import."""
    from .app import run_dashboard as _run_dashboard

    return _run_dashboard(*args, **kwargs)


def run_main_loop(*args, **kwargs):
    """Lazily import loop runner to avoid package-import cycles."""
    from .loop import run_main_loop as _run_main_loop

    return _run_main_loop(*args, **kwargs)


def __getattr__(name: str):
    if name == "RuntimeLoopCallbacks":
        from . import loop as _loop

        return getattr(_loop, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "run_dashboard",
    "RuntimeLoopCallbacks",
    "run_main_loop",
]
