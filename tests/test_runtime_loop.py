from __future__ import annotations

import unittest
from contextlib import contextmanager
from dataclasses import replace
from unittest import mock

from lazydiff.layout import DashboardLayout
from lazydiff.runtime import RuntimeLoopCallbacks, run_main_loop
from lazydiff.runtime.loop import normalize_enter
from lazydiff.state import MODE_EXPORT_DIFF, MODE_NORMAL, BrowserState


class _FakeTerminal:
    def __init__(self) -> None:
        self.entered = 0

    @contextmanager
    def raw_mode(self):
        self.entered += 1
        yield


def _loop_callbacks(*, handle_normal_key, **overrides) -> RuntimeLoopCallbacks:
    base = RuntimeLoopCallbacks(
        drain_results=lambda: None,
        reclamp_all=lambda: None,
        render=lambda _layout: None,
        handle_normal_key=handle_normal_key,
        handle_path_entry_key=lambda _key: None,
        save_left_pane_width=lambda _total, _left: None,
    )
    if not overrides:
        return base
    return replace(base, **overrides)


def _run(state: BrowserState, keys: list, callbacks: RuntimeLoopCallbacks) -> _FakeTerminal:
    terminal = _FakeTerminal()
    pending = iter(keys)

    def next_key(*_args, **_kwargs):
        key = next(pending)
        if isinstance(key, BaseException):
            raise key
        return key

    with mock.patch(
        "lazydiff.runtime.loop.shutil.get_terminal_size",
        return_value=mock.Mock(columns=120, lines=40),
    ), mock.patch("lazydiff.runtime.loop.read_key", side_effect=next_key):
        run_main_loop(state, terminal, 0, callbacks)
    return terminal


class RuntimeLoopBehaviorTests(unittest.TestCase):
    def test_loop_renders_drains_and_quits(self) -> None:
        state = BrowserState(left_width=40)
        layouts: list[DashboardLayout] = []
        drains: list[int] = []
        reclamps: list[int] = []

        terminal = _run(
            state,
            ["", "q"],
            _loop_callbacks(
                handle_normal_key=lambda key: key == "q",
                drain_results=lambda: drains.append(1),
                reclamp_all=lambda: reclamps.append(1),
                render=layouts.append,
            ),
        )

        self.assertEqual(terminal.entered, 1)
        self.assertEqual(len(layouts), 1)
        self.assertEqual(layouts[0].left_width, 40)
        self.assertEqual(len(drains), 2)
        self.assertEqual(len(reclamps), 1)
        self.assertEqual(state.files_rows, layouts[0].files_rows)
        self.assertFalse(state.dirty)

    def test_shift_arrows_resize_and_persist_left_pane(self) -> None:
        state = BrowserState(left_width=40)
        saved: list[tuple[int, int]] = []

        _run(
            state,
            ["SHIFT_LEFT", "SHIFT_LEFT", "q"],
            _loop_callbacks(
                handle_normal_key=lambda key: key == "q",
                save_left_pane_width=lambda total, left: saved.append((total, left)),
            ),
        )

        self.assertEqual(saved, [(120, 38), (120, 36)])
        self.assertEqual(state.left_width, 36)

    def test_cr_lf_pair_reaches_path_entry_as_one_enter(self) -> None:
        state = BrowserState(input_mode=MODE_EXPORT_DIFF)
        path_keys: list[str] = []
        normal_keys: list[str] = []

        def path_entry(key: str) -> None:
            path_keys.append(key)
            if key == "ENTER":
                state.input_mode = MODE_NORMAL

        def normal(key: str) -> bool:
            normal_keys.append(key)
            return key == "q"

        _run(
            state,
            ["a", "ENTER_CR", "ENTER_LF", "q"],
            _loop_callbacks(handle_normal_key=normal, handle_path_entry_key=path_entry),
        )

        self.assertEqual(path_keys, ["a", "ENTER"])
        self.assertEqual(normal_keys, ["q"])

    def test_keyboard_interrupt_does_not_exit(self) -> None:
        state = BrowserState()
        seen: list[str] = []

        def normal(key: str) -> bool:
            seen.append(key)
            return key == "q"

        _run(state, [KeyboardInterrupt(), "j", "q"], _loop_callbacks(handle_normal_key=normal))

        self.assertEqual(seen, ["j", "q"])

    def test_expired_status_message_is_cleared(self) -> None:
        state = BrowserState(status_message="✓ Exported to diff.txt", status_message_until=0.0)

        _run(state, ["q"], _loop_callbacks(handle_normal_key=lambda key: True))

        self.assertEqual(state.status_message, "")


class NormalizeEnterTests(unittest.TestCase):
    def test_lone_lf_and_cr_are_enter(self) -> None:
        state = BrowserState()
        self.assertEqual(normalize_enter(state, "ENTER_LF"), "ENTER")
        self.assertEqual(normalize_enter(state, "ENTER_CR"), "ENTER")
        self.assertIsNone(normalize_enter(state, "ENTER_LF"))
        self.assertEqual(normalize_enter(state, "ENTER_LF"), "ENTER")

    def test_other_key_resets_pending_lf(self) -> None:
        state = BrowserState()
        normalize_enter(state, "ENTER_CR")

        self.assertEqual(normalize_enter(state, "x"), "x")
        self.assertEqual(normalize_enter(state, "ENTER_LF"), "ENTER")


if __name__ == "__main__":
    unittest.main()
