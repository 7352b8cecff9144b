from __future__ import annotations

import subprocess
import unittest
from unittest import mock

from lazydiff.clipboard import paste_command_candidates, read_clipboard
from lazydiff.errors import ClipboardError


class ClipboardTests(unittest.TestCase):
    def test_macos_uses_pbpaste(self) -> None:
        with mock.patch("lazydiff.clipboard.sys.platform", "darwin"):
            self.assertEqual(paste_command_candidates(), [["pbpaste"]])

    def test_missing_tools_raise(self) -> None:
        with mock.patch("lazydiff.clipboard.shutil.which", return_value=None):
            with self.assertRaisesRegex(ClipboardError, "no clipboard tool found"):
                read_clipboard()

    def test_first_successful_tool_wins(self) -> None:
        results = [
            subprocess.CompletedProcess(["first"], 1, stdout="", stderr="nope"),
            subprocess.CompletedProcess(["second"], 0, stdout="copied/path", stderr=""),
        ]
        with mock.patch(
            "lazydiff.clipboard.paste_command_candidates", return_value=[["first"], ["second"]]
        ), mock.patch("lazydiff.clipboard.shutil.which", return_value="/usr/bin/tool"), mock.patch(
            "lazydiff.clipboard.subprocess.run", side_effect=results
        ) as run:
            self.assertEqual(read_clipboard(), "copied/path")

        self.assertEqual(run.call_count, 2)

    def test_all_tools_failing_raise(self) -> None:
        with mock.patch("lazydiff.clipboard.paste_command_candidates", return_value=[["tool"]]), mock.patch(
            "lazydiff.clipboard.shutil.which", return_value="/usr/bin/tool"
        ), mock.patch("lazydiff.clipboard.subprocess.run", side_effect=subprocess.TimeoutExpired("tool", 2.0)):
            with self.assertRaisesRegex(ClipboardError, "clipboard read failed"):
                read_clipboard()


if __name__ == "__main__":
    unittest.main()
