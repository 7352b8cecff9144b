"""
Exception types raised by lazydiff boundaries.

The dashboard never dies on these; the controller turns them into transient
status messages. Only the CLI front door exits the process.
"""

from __future__ import annotations


class LazydiffError(Exception):
    """Base class for all lazydiff specific errors."""


class GitError(LazydiffError):
    """Raised when a git invocation fails or its output cannot be written."""


class ExportError(LazydiffError):
    """Raised when an export destination cannot be resolved or written."""


class ClipboardError(LazydiffError):
    """Raised when no clipboard tool is available or reading it fails."""
