"""Exception types shared across the navigator.

Every error raised by lazynav code derives from ``LazynavError`` so callers
can convert failures into inline listings, placeholders, or popups.
"""

from __future__ import annotations

import errno
from enum import Enum
from pathlib import Path


class LazynavError(Exception):
    """Base class for all lazynav errors."""


class FilesystemErrorKind(Enum):
    NOT_FOUND = "not found"
    PERMISSION_DENIED = "permission denied"
    NOT_A_DIRECTORY = "not a directory"
    IO_OTHER = "i/o error"


class FilesystemError(LazynavError):
    """A directory could not be read or a path could not be touched."""

    def __init__(self, kind: FilesystemErrorKind, path: Path, reason: str = "") -> None:
        self.kind = kind
        self.path = path
        self.reason = reason or kind.value
        super().__init__(f"{path}: {self.reason}")

    @classmethod
    def from_os_error(cls, path: Path, exc: OSError) -> FilesystemError:
        """Map an ``OSError`` onto the filesystem error taxonomy."""
        if isinstance(exc, FileNotFoundError) or exc.errno == errno.ENOENT:
            kind = FilesystemErrorKind.NOT_FOUND
        elif isinstance(exc, PermissionError) or exc.errno in {errno.EACCES, errno.EPERM}:
            kind = FilesystemErrorKind.PERMISSION_DENIED
        elif isinstance(exc, NotADirectoryError) or exc.errno == errno.ENOTDIR:
            kind = FilesystemErrorKind.NOT_A_DIRECTORY
        else:
            kind = FilesystemErrorKind.IO_OTHER
        reason = exc.strerror or str(exc) or kind.value
        return cls(kind, path, reason)


class ImageDecodeError(LazynavError):
    """An image file could not be decoded for glyph-art preview."""


class TextDecodeError(LazynavError):
    """A file could not be read as text for preview."""


class TerminalInitError(LazynavError):
    """The terminal could not be put into interactive mode."""


__all__ = [
    "LazynavError",
    "FilesystemErrorKind",
    "FilesystemError",
    "ImageDecodeError",
    "TextDecodeError",
    "TerminalInitError",
]
