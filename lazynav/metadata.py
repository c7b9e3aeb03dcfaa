"""File metadata formatting for the preview footer and status bar."""

from __future__ import annotations

import grp
import os
import pwd
import stat
import time
from pathlib import Path

TIME_FORMAT = "%b %d %H:%M"
_SIZE_UNITS = ("B", "K", "M", "G", "T")


def human_size(size: int) -> str:
    """Compact size label: ``512B``, ``1.5K``, ``12M``."""
    value = float(size)
    for unit in _SIZE_UNITS:
        if value < 1024 or unit == _SIZE_UNITS[-1]:
            if unit == "B":
                return f"{int(value)}B"
            return f"{value:.1f}{unit}" if value < 10 else f"{value:.0f}{unit}"
        value /= 1024
    return f"{size}B"


def _owner_name(uid: int) -> str:
    try:
        return pwd.getpwuid(uid).pw_name
    except KeyError:
        return str(uid)


def _group_name(gid: int) -> str:
    try:
        return grp.getgrgid(gid).gr_name
    except KeyError:
        return str(gid)


def format_metadata(path: Path) -> str:
    """``ls -l`` style line for ``path``; empty when it cannot be stat'ed."""
    try:
        st = os.lstat(path)
    except OSError:
        return ""
    return " ".join(
        (
            stat.filemode(st.st_mode),
            str(st.st_nlink),
            _owner_name(st.st_uid),
            _group_name(st.st_gid),
            human_size(st.st_size),
            time.strftime(TIME_FORMAT, time.localtime(st.st_mtime)),
        )
    )


def shortened_path(path: Path, home: Path | None = None) -> str:
    """Render ``path`` with the home directory collapsed to ``~``."""
    home = home if home is not None else Path.home()
    if path == home:
        return "~"
    try:
        rel = path.relative_to(home)
    except ValueError:
        return str(path)
    return f"~{os.sep}{rel}"


__all__ = [
    "format_metadata",
    "human_size",
    "shortened_path",
]
