"""Confirmed single and batch deletion with continue-on-error semantics.

The workflow never raises for per-path failures: each failure is collected
and reported once through the ``inform`` collaborator after all paths ran.
"""

from __future__ import annotations

import logging
import os
import shutil
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from pathlib import Path

from .config import DEFAULT_DELETE_CURSOR_THRESHOLD
from .listing import normalize_path

logger = logging.getLogger(__name__)

CONFIRM_TITLE = "Confirm deletion?"
ERROR_TITLE = "Error deleting file"

ConfirmFn = Callable[[str, str], bool]
InformFn = Callable[[str, str], None]


@dataclass
class DeletionResult:
    """Outcome of one ``delete`` call.

    Truthiness follows ``confirmed`` so callers can branch like on a bool.
    """

    confirmed: bool
    deleted: list[Path] = field(default_factory=list)
    missing: list[Path] = field(default_factory=list)
    failures: list[tuple[Path, str]] = field(default_factory=list)

    def __bool__(self) -> bool:
        return self.confirmed

    @property
    def succeeded(self) -> bool:
        return self.confirmed and not self.failures

    @property
    def settled(self) -> list[Path]:
        """Paths that are gone from disk after the run."""
        return [*self.deleted, *self.missing]


def summary_line(path: Path) -> str:
    """Render ``parent/name`` with a trailing separator for directories.

    Paths that no longer exist are tagged so the user sees they will be skipped.
    """
    if not os.path.lexists(path):
        return f"{path.parent.name}/{path.name} (missing)"
    suffix = "/" if path.is_dir() and not path.is_symlink() else ""
    return f"{path.parent.name}/{path.name}{suffix}"


def build_summary(paths: Iterable[Path]) -> str:
    return "\n".join(summary_line(path) for path in paths)


def desired_index_after_delete(cursor: int, threshold: int = DEFAULT_DELETE_CURSOR_THRESHOLD) -> int | None:
    """Index to request for the refreshed listing after deleting at ``cursor``.

    Past ``threshold`` the cursor steps up one row to stay near the deleted
    item; otherwise the pane's index policy picks the row.
    """
    if cursor > threshold:
        return cursor - 1
    return None


def remove_path(path: Path) -> None:
    """Delete ``path``: directories recursively, files and symlinks singly."""
    if path.is_dir() and not path.is_symlink():
        shutil.rmtree(path)
    else:
        os.unlink(path)


def format_failures(result: DeletionResult) -> str:
    lines = [f"{path}: {reason}" for path, reason in result.failures]
    lines.extend(f"{path}: no longer exists, skipped" for path in result.missing)
    return "\n".join(lines)


class DeletionWorkflow:
    """Ask for confirmation, delete, and report aggregated failures."""

    def __init__(
        self,
        confirm: ConfirmFn,
        inform: InformFn,
        remove: Callable[[Path], None] = remove_path,
    ) -> None:
        self._confirm = confirm
        self._inform = inform
        self._remove = remove

    def delete(self, paths: Iterable[Path]) -> DeletionResult:
        targets = sorted({normalize_path(path) for path in paths})
        if not targets:
            return DeletionResult(confirmed=False)

        if not self._confirm(CONFIRM_TITLE, build_summary(targets)):
            logger.debug("deletion of %d path(s) declined", len(targets))
            return DeletionResult(confirmed=False)

        result = DeletionResult(confirmed=True)
        removed_dirs: set[Path] = set()
        for target in targets:
            # Sorted order visits a directory before anything inside it.
            if any(parent in removed_dirs for parent in target.parents):
                result.deleted.append(target)
                continue
            was_dir = target.is_dir() and not target.is_symlink()
            if not os.path.lexists(target):
                result.missing.append(target)
                continue
            try:
                self._remove(target)
            except OSError as exc:
                reason = exc.strerror or str(exc)
                logger.error("failed to delete %s: %s", target, reason)
                result.failures.append((target, reason))
                continue
            logger.info("deleted %s", target)
            result.deleted.append(target)
            if was_dir:
                removed_dirs.add(target)

        if result.failures or result.missing:
            self._inform(ERROR_TITLE, format_failures(result))
        return result


__all__ = [
    "CONFIRM_TITLE",
    "ERROR_TITLE",
    "DeletionResult",
    "DeletionWorkflow",
    "build_summary",
    "desired_index_after_delete",
    "format_failures",
    "remove_path",
    "summary_line",
]
