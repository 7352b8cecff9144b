"""System clipboard reads for the path entry paste key."""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
import sys

from .errors import ClipboardError

LOG = logging.getLogger(__name__)

PASTE_TIMEOUT_SECONDS = 2.0


def paste_command_candidates() -> list[list[str]]:
    """Return clipboard read commands worth trying on this platform, in order."""
    if sys.platform == "darwin":
        return [["pbpaste"]]
    if os.name == "nt":
        return [["powershell.exe", "-NoProfile", "-Command", "Get-Clipboard"]]
    return [
        ["wl-paste", "--no-newline"],
        ["xclip", "-selection", "clipboard", "-o"],
        ["xsel", "--clipboard", "--output"],
    ]


def read_clipboard(timeout_seconds: float = PASTE_TIMEOUT_SECONDS) -> str:
    """Return clipboard text from the first tool that succeeds.

    Raises ``ClipboardError`` when no candidate is installed or every one fails.
    """
    attempted = False
    for command in paste_command_candidates():
        if shutil.which(command[0]) is None:
            continue
        attempted = True
        try:
            proc = subprocess.run(
                command,
                capture_output=True,
                text=True,
                check=False,
                timeout=timeout_seconds,
            )
        except (OSError, subprocess.SubprocessError) as exc:
            LOG.debug("clipboard command %s failed: %s", command[0], exc)
            continue
        if proc.returncode == 0:
            return proc.stdout
        LOG.debug("clipboard command %s exited with %s", command[0], proc.returncode)
    if not attempted:
        raise ClipboardError("no clipboard tool found")
    raise ClipboardError("clipboard read failed")
