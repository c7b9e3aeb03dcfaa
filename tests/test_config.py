from __future__ import annotations

import json
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from lazynav import config


class ConfigBehaviorTests(unittest.TestCase):
    def _load_with(self, payload: str | None) -> config.Settings:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "config.json"
            if payload is not None:
                config_path.write_text(payload, encoding="utf-8")
            with mock.patch("lazynav.config.CONFIG_PATH", config_path):
                return config.load_settings()

    def test_missing_file_uses_defaults(self) -> None:
        self.assertEqual(self._load_with(None), config.Settings())

    def test_valid_values_are_loaded(self) -> None:
        settings = self._load_with(
            json.dumps(
                {
                    "left_pane_percent": 55,
                    "delete_cursor_threshold": 0,
                    "image_horizontal_scale": 2,
                    "max_text_preview_bytes": 4096,
                }
            )
        )

        self.assertEqual(settings.left_pane_percent, 55.0)
        self.assertEqual(settings.delete_cursor_threshold, 0)
        self.assertEqual(settings.image_horizontal_scale, 2.0)
        self.assertEqual(settings.max_text_preview_bytes, 4096)

    def test_out_of_range_and_wrong_types_fall_back(self) -> None:
        settings = self._load_with(
            json.dumps(
                {
                    "left_pane_percent": 100,
                    "delete_cursor_threshold": -1,
                    "image_horizontal_scale": 9.0,
                    "max_text_preview_bytes": True,
                }
            )
        )

        self.assertEqual(settings, config.Settings())

    def test_malformed_json_and_non_object_fall_back(self) -> None:
        with self.assertLogs("lazynav.config", level="WARNING"):
            self.assertEqual(self._load_with("{not json"), config.Settings())
        self.assertEqual(self._load_with("[1, 2, 3]"), config.Settings())


if __name__ == "__main__":
    unittest.main()
