"""Persistent JSON config helpers.

Reads the pane split, the delete-cursor heuristic, and preview limits.
All access is defensive: malformed or missing config falls back safely.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path

from platformdirs import user_config_dir

logger = logging.getLogger(__name__)

APP_NAME = "lazynav"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME

DEFAULT_LEFT_PANE_PERCENT = 40.0
DEFAULT_DELETE_CURSOR_THRESHOLD = 2
DEFAULT_IMAGE_HORIZONTAL_SCALE = 2.5
DEFAULT_MAX_TEXT_PREVIEW_BYTES = 512 * 1024


@dataclass(frozen=True)
class Settings:
    """Runtime tunables loaded once at startup."""

    left_pane_percent: float = DEFAULT_LEFT_PANE_PERCENT
    delete_cursor_threshold: int = DEFAULT_DELETE_CURSOR_THRESHOLD
    image_horizontal_scale: float = DEFAULT_IMAGE_HORIZONTAL_SCALE
    max_text_preview_bytes: int = DEFAULT_MAX_TEXT_PREVIEW_BYTES


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {}
    except (OSError, ValueError) as exc:
        logger.warning("ignoring unreadable config %s: %s", CONFIG_PATH, exc)
        return {}
    return data if isinstance(data, dict) else {}


def _load_percent(data: dict[str, object], key: str, default: float) -> float:
    """Read a percentage constrained to the open interval (0, 100)."""
    value = data.get(key)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return default
    if value <= 0 or value >= 100:
        return default
    return float(value)


def _load_nonnegative_int(data: dict[str, object], key: str, default: int) -> int:
    value = data.get(key)
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        return default
    return value


def _load_positive_int(data: dict[str, object], key: str, default: int) -> int:
    value = _load_nonnegative_int(data, key, default)
    return value if value > 0 else default


def _load_bounded_float(data: dict[str, object], key: str, default: float, low: float, high: float) -> float:
    value = data.get(key)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return default
    if value < low or value > high:
        return default
    return float(value)


def load_settings() -> Settings:
    """Build ``Settings`` from the config file, defaulting invalid values."""
    data = load_config()
    return Settings(
        left_pane_percent=_load_percent(data, "left_pane_percent", DEFAULT_LEFT_PANE_PERCENT),
        delete_cursor_threshold=_load_nonnegative_int(
            data, "delete_cursor_threshold", DEFAULT_DELETE_CURSOR_THRESHOLD
        ),
        image_horizontal_scale=_load_bounded_float(
            data, "image_horizontal_scale", DEFAULT_IMAGE_HORIZONTAL_SCALE, 1.0, 4.0
        ),
        max_text_preview_bytes=_load_positive_int(
            data, "max_text_preview_bytes", DEFAULT_MAX_TEXT_PREVIEW_BYTES
        ),
    )


__all__ = [
    "APP_NAME",
    "CONFIG_PATH",
    "Settings",
    "load_config",
    "load_settings",
]
