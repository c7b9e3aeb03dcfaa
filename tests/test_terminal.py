"""Tests for terminal mode control sequences.

Verifies raw-mode lifecycle safety, startup failure on non-TTY input, and
the forced full-repaint contract used by the main loop.
"""

from __future__ import annotations

import termios
import unittest
from unittest import mock

from lazynav.errors import TerminalInitError
from lazynav.terminal import TerminalController


def _controller() -> TerminalController:
    with mock.patch("lazynav.terminal.os.isatty", return_value=True), mock.patch(
        "lazynav.terminal.termios.tcgetattr", return_value=[0]
    ):
        return TerminalController(stdin_fd=0, stdout_fd=1)


class TerminalBehaviorTests(unittest.TestCase):
    def test_enable_and_disable_tui_mode_use_alternate_screen_sequences(self) -> None:
        saved_state = [1, 2, 3]

        with mock.patch("lazynav.terminal.os.isatty", return_value=True), mock.patch(
            "lazynav.terminal.termios.tcgetattr", return_value=saved_state
        ), mock.patch("lazynav.terminal.tty.setraw") as setraw_mock, mock.patch(
            "lazynav.terminal.os.write"
        ) as write_mock, mock.patch("lazynav.terminal.termios.tcsetattr") as setattr_mock:
            controller = TerminalController(stdin_fd=0, stdout_fd=1)
            controller.enable_tui_mode()
            controller.disable_tui_mode()

        setraw_mock.assert_called_once_with(0, termios.TCSAFLUSH)
        self.assertEqual(write_mock.call_args_list[0].args, (1, b"\x1b[?1049h\x1b[?25l"))
        self.assertEqual(write_mock.call_args_list[1].args, (1, b"\x1b[?25h\x1b[?1049l"))
        setattr_mock.assert_called_once_with(0, termios.TCSAFLUSH, saved_state)

    def test_raw_mode_restores_terminal_after_exception(self) -> None:
        controller = _controller()

        with mock.patch.object(controller, "enable_tui_mode") as enable_mock, mock.patch.object(
            controller, "disable_tui_mode"
        ) as disable_mock:
            with self.assertRaises(RuntimeError):
                with controller.raw_mode():
                    raise RuntimeError("boom")

        enable_mock.assert_called_once()
        disable_mock.assert_called_once()

    def test_non_tty_stdin_raises_terminal_init_error(self) -> None:
        with mock.patch("lazynav.terminal.os.isatty", return_value=False):
            with self.assertRaises(TerminalInitError):
                TerminalController(stdin_fd=0, stdout_fd=1)

    def test_tcgetattr_failure_raises_terminal_init_error(self) -> None:
        with mock.patch("lazynav.terminal.os.isatty", return_value=True), mock.patch(
            "lazynav.terminal.termios.tcgetattr", side_effect=termios.error(25, "Inappropriate ioctl")
        ):
            with self.assertRaises(TerminalInitError):
                TerminalController(stdin_fd=0, stdout_fd=1)

    def test_forced_redraw_clears_screen_once(self) -> None:
        controller = _controller()

        with mock.patch("lazynav.terminal.os.write") as write_mock:
            controller.write_frame("A")
            controller.write_frame("B")
            controller.force_redraw()
            controller.write_frame("C")

        payloads = [call.args[1] for call in write_mock.call_args_list]
        self.assertEqual(payloads, [b"\x1b[H\x1b[2JA", b"B", b"\x1b[H\x1b[2JC"])

    def test_size_uses_terminal_size_with_floor(self) -> None:
        controller = _controller()

        with mock.patch(
            "lazynav.terminal.shutil.get_terminal_size", return_value=mock.Mock(columns=0, lines=30)
        ):
            self.assertEqual(controller.size(), (1, 30))


if __name__ == "__main__":
    unittest.main()
