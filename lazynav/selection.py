"""Run-scoped set of marked paths used for batch operations."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from pathlib import Path

from .listing import normalize_path


class SelectionBuffer:
    """Marked paths, independent of whichever directory is displayed.

    Stale paths are kept until ``clear`` or ``discard_many`` removes them.
    """

    def __init__(self, paths: Iterable[Path] = ()) -> None:
        self._paths: set[Path] = {normalize_path(path) for path in paths}

    def __contains__(self, path: object) -> bool:
        if not isinstance(path, (str, Path)):
            return False
        return normalize_path(path) in self._paths

    def __len__(self) -> int:
        return len(self._paths)

    def __iter__(self) -> Iterator[Path]:
        return iter(sorted(self._paths))

    def __bool__(self) -> bool:
        return bool(self._paths)

    def add(self, path: Path) -> None:
        self._paths.add(normalize_path(path))

    def discard(self, path: Path) -> None:
        self._paths.discard(normalize_path(path))

    def discard_many(self, paths: Iterable[Path]) -> None:
        for path in paths:
            self.discard(path)

    def toggle(self, path: Path) -> bool:
        """Flip membership of ``path``; return whether it is now marked."""
        normalized = normalize_path(path)
        if normalized in self._paths:
            self._paths.remove(normalized)
            return False
        self._paths.add(normalized)
        return True

    def clear(self) -> None:
        self._paths.clear()


__all__ = ["SelectionBuffer"]
