"""Navigation pane: one listing, a cursor, and the shared mark buffer.

The pane carries its own directory; nothing here touches the process
working directory. Every operation leaves ``0 <= cursor < len(listing)``.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from .config import DEFAULT_DELETE_CURSOR_THRESHOLD
from .deletion import DeletionResult, DeletionWorkflow, desired_index_after_delete
from .errors import FilesystemError
from .listing import Entry, Listing, error_listing, list_directory, normalize_path
from .selection import SelectionBuffer

BUFFER_PREFIX_KEY = "b"


class PaneAction(Enum):
    """What a handled key did to the pane."""

    MOVE = "move"
    NAVIGATE = "navigate"
    MARK = "mark"
    DELETE = "delete"
    PENDING = "pending"


def choose_index(length: int, desired_index: int | None) -> int:
    """Apply the index policy for a freshly built listing of ``length`` rows."""
    if desired_index is not None and 0 <= desired_index < length:
        return desired_index
    return 1 if length > 1 else 0


def nearest_existing_directory(directory: Path) -> Path:
    """Walk up from ``directory`` until a path that is still a directory."""
    while not directory.is_dir() and directory.parent != directory:
        directory = directory.parent
    return directory


class NavigationPane:
    """Cursor/selection state machine over a directory listing."""

    def __init__(
        self,
        directory: Path,
        selection: SelectionBuffer,
        deletion: DeletionWorkflow | None = None,
        *,
        desired_index: int | None = None,
        active: bool = False,
        delete_cursor_threshold: int = DEFAULT_DELETE_CURSOR_THRESHOLD,
    ) -> None:
        self.selection = selection
        self.deletion = deletion
        self.active = active
        self.delete_cursor_threshold = delete_cursor_threshold
        self.needs_redraw = False
        self.pending_prefix = ""
        self.top = 0
        self.directory = normalize_path(directory)
        self.listing: Listing
        self.cursor = 0
        self.initialize(self.directory, desired_index)

    def initialize(self, path: Path, desired_index: int | None = None) -> bool:
        """Rebuild the listing for ``path`` and place the cursor.

        Returns ``False`` when the directory could not be read; the pane then
        shows a single error row instead of the listing.
        """
        directory = normalize_path(path)
        self.directory = directory
        try:
            listing = list_directory(directory, self.selection)
        except FilesystemError as exc:
            self.listing = error_listing(directory, exc)
            self.cursor = 0
            return False
        self.listing = listing
        self.cursor = choose_index(len(listing), desired_index)
        return True

    def refresh(self) -> bool:
        """Re-read the directory, moving up if it was removed underneath us."""
        existing = nearest_existing_directory(self.directory)
        if existing != self.directory:
            return self.initialize(existing)
        return self.initialize(self.directory, self.cursor)

    def __len__(self) -> int:
        return len(self.listing)

    def current_entry(self) -> Entry:
        return self.listing[self.cursor]

    def move_down(self) -> None:
        if self.cursor < len(self.listing) - 1:
            self.cursor += 1

    def move_up(self) -> None:
        if self.cursor > 0:
            self.cursor -= 1

    def jump_first(self) -> None:
        self.cursor = 1 if len(self.listing) > 1 else 0

    def jump_last(self) -> None:
        self.cursor = len(self.listing) - 1

    def enter_selected(self) -> bool:
        entry = self.current_entry()
        if entry.is_error or not (entry.is_dir or entry.is_parent):
            return False
        self.initialize(entry.path)
        return True

    def go_to_parent(self) -> bool:
        parent = self.directory.parent
        if parent == self.directory:
            return False
        self.initialize(parent)
        return True

    def toggle_mark(self) -> bool:
        """Flip the mark on the current entry and refresh indicators in place."""
        entry = self.current_entry()
        if not entry.selectable:
            return False
        self.selection.toggle(entry.path)
        self.refresh()
        self.needs_redraw = True
        return True

    def clear_marks(self) -> None:
        self.selection.clear()
        self.refresh()
        self.needs_redraw = True

    def delete_current(self) -> DeletionResult:
        entry = self.current_entry()
        if not entry.selectable:
            return DeletionResult(confirmed=False)
        return self._run_deletion([entry.path], clear_marks=False)

    def delete_marked(self) -> DeletionResult:
        """Delete every marked path; a clean run empties the mark buffer."""
        if not self.selection:
            return DeletionResult(confirmed=False)
        return self._run_deletion(list(self.selection), clear_marks=True)

    def _run_deletion(self, paths: list[Path], clear_marks: bool) -> DeletionResult:
        self.needs_redraw = True
        if self.deletion is None:
            return DeletionResult(confirmed=False)
        cursor = self.cursor
        result = self.deletion.delete(paths)
        if not result.confirmed:
            return result
        if clear_marks and result.succeeded:
            self.selection.clear()
        else:
            self.selection.discard_many(result.settled)
        existing = nearest_existing_directory(self.directory)
        if existing != self.directory:
            self.initialize(existing)
            return result
        self.initialize(
            self.directory,
            desired_index_after_delete(cursor, self.delete_cursor_threshold),
        )
        return result

    def visible_range(self, rows: int) -> range:
        """Scroll window of at most ``rows`` indices that keeps the cursor shown."""
        rows = max(1, rows)
        if self.cursor < self.top:
            self.top = self.cursor
        elif self.cursor >= self.top + rows:
            self.top = self.cursor - rows + 1
        self.top = max(0, min(self.top, max(0, len(self.listing) - rows)))
        return range(self.top, min(len(self.listing), self.top + rows))

    def handle_key(self, key: str) -> PaneAction | None:
        """Dispatch one normalized key token; ``None`` when not handled."""
        if self.pending_prefix == BUFFER_PREFIX_KEY:
            self.pending_prefix = ""
            if key == "c":
                self.clear_marks()
                return PaneAction.MARK
            if key == "d":
                self.delete_marked()
                return PaneAction.DELETE
            return None

        if key in {"j", "DOWN"}:
            self.move_down()
            return PaneAction.MOVE
        if key in {"k", "UP"}:
            self.move_up()
            return PaneAction.MOVE
        if key == "g":
            self.jump_first()
            return PaneAction.MOVE
        if key == "G":
            self.jump_last()
            return PaneAction.MOVE
        if key in {"h", "LEFT", "BACKSPACE"}:
            self.go_to_parent()
            return PaneAction.NAVIGATE
        if key in {"l", "RIGHT", "ENTER"}:
            self.enter_selected()
            return PaneAction.NAVIGATE
        if key == " ":
            self.toggle_mark()
            return PaneAction.MARK
        if key == "d":
            self.delete_current()
            return PaneAction.DELETE
        if key == BUFFER_PREFIX_KEY:
            self.pending_prefix = BUFFER_PREFIX_KEY
            return PaneAction.PENDING
        return None


__all__ = [
    "BUFFER_PREFIX_KEY",
    "NavigationPane",
    "PaneAction",
    "choose_index",
    "nearest_existing_directory",
]
