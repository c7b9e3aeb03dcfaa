"""Terminal control helpers for the TUI session.

Owns raw-mode lifecycle, alternate-screen switching, and frame output.
"""

from __future__ import annotations

import contextlib
import os
import shutil
import termios
import tty

from .errors import TerminalInitError

FALLBACK_SIZE = (80, 24)


class TerminalController:
    def __init__(self, stdin_fd: int, stdout_fd: int) -> None:
        self.stdin_fd = stdin_fd
        self.stdout_fd = stdout_fd
        if not os.isatty(stdin_fd):
            raise TerminalInitError("standard input is not a terminal")
        try:
            self._saved_tty_state = termios.tcgetattr(stdin_fd)
        except termios.error as exc:
            raise TerminalInitError(f"cannot read terminal attributes: {exc}") from exc
        self._force_full_repaint = True

    def enable_tui_mode(self) -> None:
        tty.setraw(self.stdin_fd, termios.TCSAFLUSH)
        # Enter alternate screen and hide cursor.
        os.write(self.stdout_fd, b"\x1b[?1049h\x1b[?25l")
        self._force_full_repaint = True

    def disable_tui_mode(self) -> None:
        # Show cursor and restore the main screen buffer.
        os.write(self.stdout_fd, b"\x1b[?25h\x1b[?1049l")
        termios.tcsetattr(self.stdin_fd, termios.TCSAFLUSH, self._saved_tty_state)

    def size(self) -> tuple[int, int]:
        """Return ``(columns, rows)`` of the controlling terminal."""
        term = shutil.get_terminal_size(FALLBACK_SIZE)
        return max(1, term.columns), max(1, term.lines)

    def force_redraw(self) -> None:
        """Request that the next frame clears the screen before drawing."""
        self._force_full_repaint = True

    def write(self, text: str) -> None:
        os.write(self.stdout_fd, text.encode("utf-8", errors="replace"))

    def write_frame(self, frame: str) -> None:
        """Write one composed frame, clearing first when a repaint was forced."""
        if self._force_full_repaint:
            frame = "\x1b[H\x1b[2J" + frame
            self._force_full_repaint = False
        self.write(frame)

    @contextlib.contextmanager
    def raw_mode(self):
        try:
            self.enable_tui_mode()
            yield
        finally:
            self.disable_tui_mode()
