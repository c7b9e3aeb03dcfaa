"""Interactive session wiring and the main event loop.

Single-threaded: render a frame when something changed, block briefly on
the next key, dispatch it to the controller, repeat until quit.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Callable
from pathlib import Path

from .config import Settings, load_settings
from .controller import PaneController
from .input import read_key
from .popup import PopupPresenter
from .render import build_frame, compute_layout
from .terminal import TerminalController

logger = logging.getLogger(__name__)

# Keys are polled with a timeout so terminal resizes are noticed while idle.
KEY_POLL_MS = 250


def run_main_loop(
    controller: PaneController,
    terminal: TerminalController,
    key_reader: Callable[[int, int], str] = read_key,
) -> None:
    """Drive ``controller`` until it requests quit."""
    last_size: tuple[int, int] | None = None
    dirty = True
    while not controller.quit_requested:
        size = terminal.size()
        if last_size is not None and size != last_size:
            controller.handle_resize()
        last_size = size

        if controller.needs_redraw:
            terminal.force_redraw()
            controller.needs_redraw = False
            dirty = True

        if dirty:
            layout = compute_layout(size[0], size[1], controller.settings.left_pane_percent)
            terminal.write_frame(build_frame(controller, layout))
            dirty = False

        key = key_reader(terminal.stdin_fd, KEY_POLL_MS)
        if not key:
            continue
        controller.handle_key(key)
        dirty = True


def run(
    start_dir: Path,
    settings: Settings | None = None,
    *,
    stdin_fd: int | None = None,
    stdout_fd: int | None = None,
) -> Path:
    """Run an interactive session rooted at ``start_dir``.

    Returns the directory the primary pane ended on. Raises
    ``TerminalInitError`` before drawing anything when stdin is not a TTY.
    """
    settings = settings or load_settings()
    terminal = TerminalController(
        sys.stdin.fileno() if stdin_fd is None else stdin_fd,
        sys.stdout.fileno() if stdout_fd is None else stdout_fd,
    )
    popups = PopupPresenter(terminal)

    def preview_size() -> tuple[int, int]:
        columns, rows = terminal.size()
        layout = compute_layout(columns, rows, settings.left_pane_percent)
        return layout.preview_rows, layout.preview_columns

    controller = PaneController(
        start_dir,
        popups.confirm,
        popups.inform,
        settings,
        preview_size=preview_size,
    )
    logger.info("session started in %s", controller.primary.directory)
    with terminal.raw_mode():
        run_main_loop(controller, terminal)
    logger.info("session ended in %s", controller.final_path)
    return controller.final_path


__all__ = ["KEY_POLL_MS", "run", "run_main_loop"]
