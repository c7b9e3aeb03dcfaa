"""Preview dispatch for the entry under the primary cursor.

Classifies the path once, then builds one of four preview values: a nested
navigation pane, glyph art, raw text, or a placeholder message.
"""

from __future__ import annotations

import logging
import os
import stat
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Union

from .config import Settings
from .deletion import DeletionWorkflow
from .errors import ImageDecodeError, TextDecodeError
from .glyph_art import render_glyph_art
from .listing import Entry
from .pane import NavigationPane
from .selection import SelectionBuffer

logger = logging.getLogger(__name__)

IMAGE_EXTENSIONS = frozenset({".png", ".jpg", ".jpeg"})
PLACEHOLDER_MESSAGE = "cannot preview"
# Longest UTF-8 sequence minus one: a cut at the read limit can split this many bytes.
_MAX_SPLIT_SEQUENCE = 3


class PreviewKind(Enum):
    DIRECTORY = "directory"
    IMAGE = "image"
    TEXT = "text"
    UNKNOWN = "unknown"


@dataclass
class NestedPane:
    pane: NavigationPane


@dataclass(frozen=True)
class GlyphArt:
    lines: tuple[str, ...]


@dataclass(frozen=True)
class RawText:
    content: str
    path: Path
    truncated: bool = False


@dataclass(frozen=True)
class Placeholder:
    message: str = PLACEHOLDER_MESSAGE


PreviewContent = Union[NestedPane, GlyphArt, RawText, Placeholder]


def classify(path: Path) -> PreviewKind:
    """Decide how ``path`` should be previewed; symlinks are followed."""
    try:
        mode = os.stat(path).st_mode
    except OSError:
        return PreviewKind.UNKNOWN
    if stat.S_ISDIR(mode):
        return PreviewKind.DIRECTORY
    if not stat.S_ISREG(mode):
        return PreviewKind.UNKNOWN
    if path.suffix.lower() in IMAGE_EXTENSIONS:
        return PreviewKind.IMAGE
    return PreviewKind.TEXT


def read_preview_text(path: Path, limit: int) -> tuple[str, bool]:
    """Read at most ``limit`` bytes of ``path`` as strict UTF-8.

    Returns ``(text, truncated)``. Raises ``TextDecodeError`` for unreadable
    files, content with NUL bytes, or invalid UTF-8.
    """
    try:
        with path.open("rb") as handle:
            data = handle.read(limit + 1)
    except OSError as exc:
        raise TextDecodeError(f"{path}: {exc.strerror or exc}") from exc

    truncated = len(data) > limit
    data = data[:limit]
    if b"\x00" in data:
        raise TextDecodeError(f"{path}: binary content")
    try:
        return data.decode("utf-8"), truncated
    except UnicodeDecodeError as exc:
        # Only forgive a multi-byte sequence cut in half by the read limit.
        if truncated and exc.start >= len(data) - _MAX_SPLIT_SEQUENCE and exc.end == len(data):
            return data[: exc.start].decode("utf-8"), truncated
        raise TextDecodeError(f"{path}: {exc.reason}") from exc


class PreviewDispatcher:
    """Turn the currently selected entry into a ``PreviewContent`` value."""

    def __init__(
        self,
        selection: SelectionBuffer,
        settings: Settings | None = None,
        deletion: DeletionWorkflow | None = None,
    ) -> None:
        self.selection = selection
        self.settings = settings or Settings()
        self.deletion = deletion

    def render(self, entry: Entry, rows: int, columns: int) -> PreviewContent:
        if entry.is_error:
            return Placeholder()

        kind = classify(entry.path)
        if kind is PreviewKind.DIRECTORY:
            return NestedPane(self._nested_pane(entry.path))
        if kind is PreviewKind.IMAGE:
            return self._glyph_art(entry.path, rows, columns)
        if kind is PreviewKind.TEXT:
            return self._raw_text(entry.path)
        return Placeholder()

    def _nested_pane(self, directory: Path) -> NavigationPane:
        return NavigationPane(
            directory,
            self.selection,
            self.deletion,
            desired_index=0,
            delete_cursor_threshold=self.settings.delete_cursor_threshold,
        )

    def _glyph_art(self, path: Path, rows: int, columns: int) -> PreviewContent:
        try:
            lines = render_glyph_art(
                path,
                max(1, columns),
                max(1, rows),
                horizontal_scale=self.settings.image_horizontal_scale,
            )
        except ImageDecodeError as exc:
            logger.debug("image preview failed: %s", exc)
            return Placeholder()
        return GlyphArt(tuple(lines))

    def _raw_text(self, path: Path) -> PreviewContent:
        try:
            content, truncated = read_preview_text(path, self.settings.max_text_preview_bytes)
        except TextDecodeError as exc:
            logger.debug("text preview failed: %s", exc)
            return Placeholder()
        return RawText(content=content, path=path, truncated=truncated)


__all__ = [
    "GlyphArt",
    "IMAGE_EXTENSIONS",
    "NestedPane",
    "PLACEHOLDER_MESSAGE",
    "Placeholder",
    "PreviewContent",
    "PreviewDispatcher",
    "PreviewKind",
    "RawText",
    "classify",
    "read_preview_text",
]
