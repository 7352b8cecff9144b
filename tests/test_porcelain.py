"""Tests for git status and log output parsing."""

from __future__ import annotations

import unittest

from lazydiff.git.porcelain import LOG_FIELD_SEPARATOR, is_staged, is_unstaged, parse_log, parse_porcelain_z
from lazydiff.git.types import ChangeRecord


class ParsePorcelainTests(unittest.TestCase):
    def test_plain_records(self) -> None:
        records = parse_porcelain_z(" M src/a.ts\0?? src/b.ts\0A  new.py\0 D gone.txt\0")

        self.assertEqual(
            [(record.path, record.status_code, record.status) for record in records],
            [
                ("src/a.ts", " M", "M"),
                ("src/b.ts", "??", "??"),
                ("new.py", "A ", "A"),
                ("gone.txt", " D", "D"),
            ],
        )

    def test_rename_consumes_original_path_token(self) -> None:
        records = parse_porcelain_z("R  new_name.py\0old_name.py\0 M other.py\0")

        self.assertEqual(
            records,
            [
                ChangeRecord(path="new_name.py", status_code="R ", status="R", old_path="old_name.py"),
                ChangeRecord(path="other.py", status_code=" M", status="M"),
            ],
        )

    def test_copy_is_handled_like_rename(self) -> None:
        records = parse_porcelain_z("C  copy.py\0source.py\0")

        self.assertEqual(records[0].status, "C")
        self.assertEqual(records[0].old_path, "source.py")

    def test_truncated_rename_is_dropped(self) -> None:
        self.assertEqual(parse_porcelain_z("R  new_name.py\0"), [])

    def test_paths_with_spaces_survive(self) -> None:
        records = parse_porcelain_z(" M dir with space/file name.txt\0")

        self.assertEqual(records[0].path, "dir with space/file name.txt")

    def test_empty_output(self) -> None:
        self.assertEqual(parse_porcelain_z(""), [])


class GroupClassificationTests(unittest.TestCase):
    def _record(self, code: str) -> ChangeRecord:
        return ChangeRecord(path="x", status_code=code, status=code.strip())

    def test_unstaged_codes(self) -> None:
        for code in (" M", " D", "??", "MM", "AM"):
            self.assertTrue(is_unstaged(self._record(code)), code)
        for code in ("M ", "A ", "D ", "R "):
            self.assertFalse(is_unstaged(self._record(code)), code)

    def test_staged_codes(self) -> None:
        for code in ("M ", "A ", "D ", "R ", "MM"):
            self.assertTrue(is_staged(self._record(code)), code)
        for code in (" M", "??", " D"):
            self.assertFalse(is_staged(self._record(code)), code)

    def test_partially_staged_file_is_in_both_groups(self) -> None:
        record = self._record("MM")

        self.assertTrue(is_staged(record))
        self.assertTrue(is_unstaged(record))


class ParseLogTests(unittest.TestCase):
    def test_fields_are_split_on_separator(self) -> None:
        sep = LOG_FIELD_SEPARATOR
        output = f"abc1234{sep}Ada{sep}Fix: a | b{sep}Mon Jan 1\ndef5678{sep}Bob{sep}Init{sep}Sun Dec 31\n"

        commits = parse_log(output)

        self.assertEqual([commit.hash for commit in commits], ["abc1234", "def5678"])
        self.assertEqual(commits[0].message, "Fix: a | b")
        self.assertEqual(commits[1].author, "Bob")

    def test_missing_fields_become_empty(self) -> None:
        commits = parse_log("abc1234")

        self.assertEqual((commits[0].hash, commits[0].author, commits[0].message), ("abc1234", "", ""))

    def test_empty_output(self) -> None:
        self.assertEqual(parse_log(""), [])


if __name__ == "__main__":
    unittest.main()
