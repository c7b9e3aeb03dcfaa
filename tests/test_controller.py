"""Tests for pane focus, key routing, and preview synchronization."""

from __future__ import annotations

import os
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from lazynav.config import Settings
from lazynav.controller import HELP_TITLE, Focus, PaneController
from lazynav.preview import NestedPane, RawText


class PaneControllerTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(os.path.abspath(self._tmp.name))
        (self.root / "alpha").mkdir()
        (self.root / "alpha" / "one.txt").write_text("1", encoding="utf-8")
        (self.root / "alpha" / "two.txt").write_text("2", encoding="utf-8")
        (self.root / "beta").mkdir()
        (self.root / "notes.txt").write_text("hello", encoding="utf-8")
        self.confirm = mock.Mock(return_value=True)
        self.inform = mock.Mock()

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def _controller(self) -> PaneController:
        return PaneController(
            self.root,
            self.confirm,
            self.inform,
            Settings(),
            preview_size=lambda: (10, 40),
        )

    def test_initial_state_previews_first_entry(self) -> None:
        controller = self._controller()

        self.assertIs(controller.focus, Focus.FILE_PICKER)
        self.assertIs(controller.active_pane, controller.primary)
        self.assertEqual(controller.primary.current_entry().name, "alpha")
        self.assertIsInstance(controller.preview, NestedPane)
        self.assertEqual(controller.preview.pane.directory, self.root / "alpha")
        self.assertEqual(controller.final_path, self.root)

    def test_movement_in_primary_recomputes_preview(self) -> None:
        controller = self._controller()

        controller.handle_key("G")

        self.assertEqual(controller.primary.current_entry().name, "notes.txt")
        self.assertEqual(controller.preview, RawText(content="hello", path=self.root / "notes.txt"))

    def test_ctrl_l_focuses_nested_pane_only_when_present(self) -> None:
        controller = self._controller()

        self.assertTrue(controller.handle_key("CTRL_L"))
        self.assertIs(controller.focus, Focus.PREVIEW)
        self.assertIs(controller.active_pane, controller.preview.pane)
        self.assertTrue(controller.needs_redraw)

        controller.handle_key("CTRL_H")
        controller.handle_key("G")
        self.assertFalse(controller.handle_key("CTRL_L"))
        self.assertIs(controller.focus, Focus.FILE_PICKER)

    def test_nested_movement_leaves_primary_and_preview_alone(self) -> None:
        controller = self._controller()
        controller.handle_key("CTRL_L")
        nested = controller.preview.pane

        controller.handle_key("j")
        controller.handle_key("j")

        self.assertIs(controller.preview.pane, nested)
        self.assertEqual(nested.cursor, 2)
        self.assertEqual(controller.primary.cursor, 1)
        self.assertEqual(controller.primary.directory, self.root)

    def test_nested_navigation_does_not_change_final_path(self) -> None:
        controller = self._controller()
        controller.handle_key("CTRL_L")

        controller.handle_key("h")

        self.assertEqual(controller.preview.pane.directory, self.root)
        self.assertEqual(controller.final_path, self.root)

    def test_tab_toggles_focus(self) -> None:
        controller = self._controller()

        controller.handle_key("TAB")
        self.assertIs(controller.focus, Focus.PREVIEW)
        controller.handle_key("TAB")
        self.assertIs(controller.focus, Focus.FILE_PICKER)

    def test_mark_in_nested_pane_refreshes_primary(self) -> None:
        controller = self._controller()
        controller.handle_key("CTRL_L")
        controller.handle_key("j")

        controller.handle_key(" ")

        self.assertIn(self.root / "alpha" / "one.txt", controller.selection)
        self.assertTrue(controller.needs_redraw)
        self.assertEqual(controller.primary.current_entry().name, "alpha")

    def test_nested_delete_keeps_primary_on_previewed_directory(self) -> None:
        controller = self._controller()
        controller.handle_key("CTRL_L")
        controller.handle_key("j")

        controller.handle_key("d")

        self.assertFalse((self.root / "alpha" / "one.txt").exists())
        self.assertIs(controller.focus, Focus.PREVIEW)
        self.assertEqual(controller.primary.current_entry().name, "alpha")

    def test_deleting_previewed_directory_from_nested_mark_returns_focus(self) -> None:
        controller = self._controller()
        controller.primary.cursor = 2
        controller.refresh_preview()
        controller.handle_key("CTRL_L")
        controller.handle_key("k")
        self.assertTrue(controller.active_pane.current_entry().is_parent)
        controller.selection.add(self.root / "beta")

        controller.handle_key("b")
        controller.handle_key("d")

        self.assertFalse((self.root / "beta").exists())
        self.assertIs(controller.focus, Focus.FILE_PICKER)
        self.assertNotIsInstance(controller.preview, NestedPane)

    def test_buffer_prefix_is_not_taken_by_global_keys(self) -> None:
        controller = self._controller()
        controller.handle_key(" ")

        controller.handle_key("b")
        handled = controller.handle_key("q")

        self.assertFalse(handled)
        self.assertFalse(controller.quit_requested)
        self.assertEqual(len(controller.selection), 1)

    def test_help_and_quit(self) -> None:
        controller = self._controller()

        controller.handle_key("?")
        self.inform.assert_called_once()
        self.assertEqual(self.inform.call_args.args[0], HELP_TITLE)
        self.assertTrue(controller.needs_redraw)

        controller.handle_key("q")
        self.assertTrue(controller.quit_requested)

    def test_primary_navigation_updates_final_path(self) -> None:
        controller = self._controller()

        controller.handle_key("l")

        self.assertEqual(controller.final_path, self.root / "alpha")
        self.assertIsInstance(controller.preview, RawText)

    def test_delete_in_primary_refreshes_preview(self) -> None:
        controller = self._controller()
        controller.handle_key("G")

        controller.handle_key("d")

        self.assertFalse((self.root / "notes.txt").exists())
        self.assertEqual(controller.primary.cursor, 2)
        self.assertEqual(controller.primary.current_entry().name, "beta")
        self.assertIsInstance(controller.preview, NestedPane)

    def test_deleting_current_directory_leaves_an_existing_final_path(self) -> None:
        controller = self._controller()
        controller.handle_key("l")
        controller.selection.add(self.root / "alpha")

        controller.handle_key("b")
        controller.handle_key("d")

        self.assertFalse((self.root / "alpha").exists())
        self.assertEqual(controller.final_path, self.root)
        self.assertFalse(controller.primary.listing.is_error)
        self.inform.assert_not_called()

    def test_empty_directory_previews_parent_listing(self) -> None:
        controller = self._controller()
        controller.handle_key("j")
        controller.handle_key("l")

        self.assertEqual(controller.final_path, self.root / "beta")
        self.assertEqual(controller.primary.cursor, 0)
        self.assertIsInstance(controller.preview, NestedPane)
        self.assertEqual(controller.preview.pane.directory, self.root)


if __name__ == "__main__":
    unittest.main()
