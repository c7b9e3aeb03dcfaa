"""Top-level pane controller.

Routes each key to the active pane, keeps the preview in sync with the
primary cursor, and tracks whether the next frame must be fully repainted.
"""

from __future__ import annotations

from collections.abc import Callable
from enum import Enum
from pathlib import Path

from .config import Settings
from .deletion import ConfirmFn, DeletionWorkflow, InformFn, remove_path
from .pane import NavigationPane, PaneAction
from .preview import GlyphArt, NestedPane, PreviewContent, PreviewDispatcher
from .selection import SelectionBuffer

HELP_TITLE = "Keybindings"
KEYBINDINGS_HELP = "\n".join(
    (
        "j / Down      move down",
        "k / Up        move up",
        "l / Enter     enter directory",
        "h / Left      go to parent",
        "g / G         first / last entry",
        "Space         mark / unmark",
        "d             delete entry",
        "b then c      clear marks",
        "b then d      delete marked",
        "Ctrl+L        focus preview",
        "Ctrl+H        focus file picker",
        "Tab           switch pane",
        "?             this help",
        "q             quit",
    )
)

DEFAULT_PREVIEW_SIZE = (24, 80)
QUIT_KEYS = frozenset({"q", "CTRL_C"})

_PRIMARY_REFRESH_ACTIONS = {PaneAction.MOVE, PaneAction.NAVIGATE, PaneAction.MARK, PaneAction.DELETE}
_MUTATING_ACTIONS = {PaneAction.MARK, PaneAction.DELETE}


class Focus(Enum):
    FILE_PICKER = "file_picker"
    PREVIEW = "preview"


class PaneController:
    """Owns the primary pane, the shared mark buffer, and the preview."""

    def __init__(
        self,
        start_dir: Path,
        confirm: ConfirmFn,
        inform: InformFn,
        settings: Settings | None = None,
        *,
        preview_size: Callable[[], tuple[int, int]] = lambda: DEFAULT_PREVIEW_SIZE,
        remove: Callable[[Path], None] = remove_path,
    ) -> None:
        self.settings = settings or Settings()
        self.selection = SelectionBuffer()
        self.deletion = DeletionWorkflow(confirm, inform, remove)
        self._inform = inform
        self._preview_size = preview_size
        self.primary = NavigationPane(
            start_dir,
            self.selection,
            self.deletion,
            active=True,
            delete_cursor_threshold=self.settings.delete_cursor_threshold,
        )
        self.dispatcher = PreviewDispatcher(self.selection, self.settings, self.deletion)
        self.focus = Focus.FILE_PICKER
        self.needs_redraw = False
        self.quit_requested = False
        self.preview: PreviewContent
        self.refresh_preview()

    @property
    def final_path(self) -> Path:
        return self.primary.directory

    @property
    def nested_pane(self) -> NavigationPane | None:
        if isinstance(self.preview, NestedPane):
            return self.preview.pane
        return None

    @property
    def active_pane(self) -> NavigationPane:
        nested = self.nested_pane
        if self.focus is Focus.PREVIEW and nested is not None:
            return nested
        return self.primary

    def refresh_preview(self) -> None:
        rows, columns = self._preview_size()
        self.preview = self.dispatcher.render(self.primary.current_entry(), rows, columns)

    def handle_resize(self) -> None:
        """Re-render size-dependent previews; nested panes keep their cursor."""
        if isinstance(self.preview, GlyphArt):
            self.refresh_preview()
        self.needs_redraw = True

    def activate_preview(self) -> bool:
        nested = self.nested_pane
        if nested is None:
            return False
        self.focus = Focus.PREVIEW
        self.primary.active = False
        nested.active = True
        self.needs_redraw = True
        return True

    def activate_file_picker(self) -> None:
        nested = self.nested_pane
        if nested is not None:
            nested.active = False
        self.focus = Focus.FILE_PICKER
        self.primary.active = True
        self.needs_redraw = True

    def toggle_focus(self) -> None:
        if self.focus is Focus.PREVIEW:
            self.activate_file_picker()
        else:
            self.activate_preview()

    def show_help(self) -> None:
        self._inform(HELP_TITLE, KEYBINDINGS_HELP)
        self.needs_redraw = True

    def handle_key(self, key: str) -> bool:
        """Dispatch one key token. Returns ``True`` when the key was handled."""
        pane = self.active_pane
        if not pane.pending_prefix:
            if key in QUIT_KEYS:
                self.quit_requested = True
                return True
            if key == "?":
                self.show_help()
                return True
            if key == "CTRL_L":
                return self.activate_preview()
            if key == "CTRL_H":
                self.activate_file_picker()
                return True
            if key == "TAB":
                self.toggle_focus()
                return True

        action = pane.handle_key(key)
        if pane.needs_redraw:
            self.needs_redraw = True
            pane.needs_redraw = False
        if action is None:
            return False

        if pane is self.primary:
            if action in _PRIMARY_REFRESH_ACTIONS:
                self.refresh_preview()
        elif action in _MUTATING_ACTIONS:
            self._sync_primary_after_nested_change()
        return True

    def _sync_primary_after_nested_change(self) -> None:
        """Refresh mark indicators in the primary pane without moving off its entry."""
        current = self.primary.current_entry()
        self.primary.refresh()
        if current.is_parent:
            return
        index = self.primary.listing.index_of(current.path)
        if index is not None:
            self.primary.cursor = index
            return
        # The previewed directory itself went away.
        self.activate_file_picker()
        self.refresh_preview()


__all__ = [
    "DEFAULT_PREVIEW_SIZE",
    "Focus",
    "HELP_TITLE",
    "KEYBINDINGS_HELP",
    "QUIT_KEYS",
    "PaneController",
]
