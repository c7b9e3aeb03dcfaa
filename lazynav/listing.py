"""Directory listing model: entries, kinds, and ordered listings.

A listing always starts with the parent marker, then directories, then
files and symlinks, each group sorted by case-sensitive file name.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Container, Iterator
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from .errors import FilesystemError

logger = logging.getLogger(__name__)

PARENT_LABEL = " .."
MARK_INDICATOR = "-"
ERROR_LABEL_PREFIX = "Couldn't read entry: "


class EntryKind(Enum):
    DIRECTORY = "directory"
    FILE = "file"
    SYMLINK = "symlink"
    PARENT_MARKER = "parent"


# Nerd Font folder/file/link icons; the leading cell is where a mark goes.
KIND_GLYPHS: dict[EntryKind, str] = {
    EntryKind.DIRECTORY: " \uf07b ",
    EntryKind.FILE: " \uf15b ",
    EntryKind.SYMLINK: " \uf0c1 ",
}


@dataclass(frozen=True)
class Entry:
    """One row of a listing."""

    path: Path
    display_label: str
    kind: EntryKind
    is_error: bool = False

    @property
    def name(self) -> str:
        return self.path.name

    @property
    def is_dir(self) -> bool:
        return self.kind is EntryKind.DIRECTORY

    @property
    def is_parent(self) -> bool:
        return self.kind is EntryKind.PARENT_MARKER

    @property
    def selectable(self) -> bool:
        """Whether marking or deleting this entry makes sense."""
        return not (self.is_parent or self.is_error)


@dataclass(frozen=True)
class Listing:
    """Immutable ordered entries for one directory."""

    directory: Path
    entries: tuple[Entry, ...]

    def __len__(self) -> int:
        return len(self.entries)

    def __getitem__(self, index: int) -> Entry:
        return self.entries[index]

    def __iter__(self) -> Iterator[Entry]:
        return iter(self.entries)

    @property
    def is_error(self) -> bool:
        return len(self.entries) == 1 and self.entries[0].is_error

    def index_of(self, path: Path) -> int | None:
        for idx, entry in enumerate(self.entries):
            if idx > 0 and entry.path == path:
                return idx
        return None


def normalize_path(path: Path | str) -> Path:
    """Return an absolute path with ``.``/``..`` components collapsed."""
    return Path(os.path.abspath(os.fspath(path)))


def parent_of(directory: Path) -> Path:
    """Return the parent directory, or ``directory`` itself at the root."""
    return directory.parent


def display_label_for(path: Path, kind: EntryKind, marked: bool = False) -> str:
    """Build the glyph-prefixed label, replacing the lead cell with a mark."""
    if kind is EntryKind.PARENT_MARKER:
        label = PARENT_LABEL
    else:
        label = KIND_GLYPHS[kind] + path.name
    if marked:
        label = MARK_INDICATOR + label[1:]
    return label


def _classify_child(child: os.DirEntry) -> EntryKind:
    try:
        if child.is_dir(follow_symlinks=True):
            return EntryKind.DIRECTORY
        if child.is_symlink():
            return EntryKind.SYMLINK
    except OSError:
        return EntryKind.FILE
    return EntryKind.FILE


def list_directory(path: Path | str, marked: Container[Path] = ()) -> Listing:
    """List ``path`` as a parent-marker-first, directories-first listing.

    ``marked`` holds paths that should carry the mark indicator. Raises
    ``FilesystemError`` when the directory cannot be scanned.
    """
    directory = normalize_path(path)
    directories: list[tuple[str, Path]] = []
    others: list[tuple[str, Path, EntryKind]] = []
    try:
        with os.scandir(directory) as children:
            for child in children:
                kind = _classify_child(child)
                child_path = directory / child.name
                if kind is EntryKind.DIRECTORY:
                    directories.append((child.name, child_path))
                else:
                    others.append((child.name, child_path, kind))
    except OSError as exc:
        error = FilesystemError.from_os_error(directory, exc)
        logger.warning("cannot list %s: %s", directory, error.reason)
        raise error from exc

    directories.sort(key=lambda item: item[0])
    others.sort(key=lambda item: item[0])

    parent = parent_of(directory)
    entries: list[Entry] = [
        Entry(path=parent, display_label=PARENT_LABEL, kind=EntryKind.PARENT_MARKER)
    ]
    for _name, child_path in directories:
        entries.append(
            Entry(
                path=child_path,
                display_label=display_label_for(child_path, EntryKind.DIRECTORY, child_path in marked),
                kind=EntryKind.DIRECTORY,
            )
        )
    for _name, child_path, kind in others:
        entries.append(
            Entry(
                path=child_path,
                display_label=display_label_for(child_path, kind, child_path in marked),
                kind=kind,
            )
        )
    return Listing(directory=directory, entries=tuple(entries))


def error_listing(directory: Path, error: Exception) -> Listing:
    """Single informational row shown in place of an unreadable directory."""
    reason = error.reason if isinstance(error, FilesystemError) else str(error)
    entry = Entry(
        path=directory,
        display_label=ERROR_LABEL_PREFIX + reason,
        kind=EntryKind.PARENT_MARKER,
        is_error=True,
    )
    return Listing(directory=directory, entries=(entry,))


__all__ = [
    "EntryKind",
    "Entry",
    "Listing",
    "KIND_GLYPHS",
    "MARK_INDICATOR",
    "PARENT_LABEL",
    "ERROR_LABEL_PREFIX",
    "normalize_path",
    "parent_of",
    "display_label_for",
    "list_directory",
    "error_listing",
]
