"""Blocking modal popups drawn over the current frame.

``confirm`` waits for a yes/no answer; ``inform`` waits for any key. Both
redraw nothing underneath: the caller repaints after the popup returns.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from .ansi import clip_ansi_line, display_width
from .input import read_key
from .terminal import TerminalController

logger = logging.getLogger(__name__)

YES_KEYS = frozenset({"y", "Y"})
NO_KEYS = frozenset({"n", "N", "ESC"})
CONFIRM_HINT = "[y]es / [n]o"
INFORM_HINT = "press any key"

BORDER_STYLE = "\033[38;5;45m"
TITLE_STYLE = "\033[1;38;5;45m"
HINT_STYLE = "\033[2;38;5;250m"
RESET = "\033[0m"


def render_modal(title: str, message: str, hint: str, width: int, height: int) -> str:
    """Compose a centered rounded box holding ``message`` lines and a hint."""
    body = message.splitlines() or [""]
    content_w = max([display_width(title) + 4, display_width(hint)] + [display_width(line) for line in body])
    modal_w = max(20, min(width - 2, content_w + 4))
    inner_w = max(1, modal_w - 2)
    max_body = max(1, height - 6)
    if len(body) > max_body:
        hidden = len(body) - max_body + 1
        body = body[: max_body - 1] + [f"... and {hidden} more"]
    modal_h = len(body) + 4
    x = max(0, (width - modal_w) // 2)
    y = max(0, (height - modal_h) // 2)

    out: list[str] = []
    out.append(f"\033[{y + 1};{x + 1}H{BORDER_STYLE}╭")
    out.append("─" * inner_w)
    out.append(f"╮{RESET}")
    for i in range(modal_h - 2):
        out.append(f"\033[{y + 2 + i};{x + 1}H{BORDER_STYLE}│{RESET}")
        out.append(" " * inner_w)
        out.append(f"{BORDER_STYLE}│{RESET}")
    out.append(f"\033[{y + modal_h};{x + 1}H{BORDER_STYLE}╰")
    out.append("─" * inner_w)
    out.append(f"╯{RESET}")

    title_text = clip_ansi_line(f" {title} ", max(1, inner_w - 2))
    out.append(f"\033[{y + 1};{x + 3}H{TITLE_STYLE}{title_text}{RESET}")

    for i, line in enumerate(body):
        out.append(f"\033[{y + 2 + i};{x + 3}H")
        out.append(clip_ansi_line(line, max(1, inner_w - 2)))
        out.append(RESET)

    out.append(f"\033[{y + modal_h - 1};{x + 3}H{HINT_STYLE}")
    out.append(clip_ansi_line(hint, max(1, inner_w - 2)))
    out.append(RESET)
    return "".join(out)


class PopupPresenter:
    """Draws modals on the terminal and polls for the answering key."""

    def __init__(
        self,
        terminal: TerminalController,
        key_reader: Callable[[int], str] = read_key,
    ) -> None:
        self.terminal = terminal
        self._read_key = key_reader

    def _show(self, title: str, message: str, hint: str) -> None:
        columns, rows = self.terminal.size()
        self.terminal.write(render_modal(title, message, hint, columns, rows))

    def confirm(self, title: str, message: str) -> bool:
        """Block until ``y`` or ``n``; any failure answers ``False``."""
        try:
            self._show(title, message, CONFIRM_HINT)
            while True:
                key = self._read_key(self.terminal.stdin_fd)
                if key in YES_KEYS:
                    return True
                if key == "" or key in NO_KEYS:
                    return False
        except (OSError, ValueError):
            logger.exception("confirm popup failed")
            return False
        finally:
            self.terminal.force_redraw()

    def inform(self, title: str, message: str) -> None:
        """Block until any key is pressed."""
        try:
            self._show(title, message, INFORM_HINT)
            self._read_key(self.terminal.stdin_fd)
        except (OSError, ValueError):
            logger.exception("inform popup failed")
        finally:
            self.terminal.force_redraw()


__all__ = [
    "CONFIRM_HINT",
    "INFORM_HINT",
    "PopupPresenter",
    "render_modal",
]
