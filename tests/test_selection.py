from __future__ import annotations

import unittest
from pathlib import Path

from lazynav.selection import SelectionBuffer


class SelectionBufferTests(unittest.TestCase):
    def test_toggle_twice_restores_membership(self) -> None:
        buffer = SelectionBuffer()
        path = Path("/tmp/example.txt")

        self.assertTrue(buffer.toggle(path))
        self.assertIn(path, buffer)
        self.assertFalse(buffer.toggle(path))
        self.assertNotIn(path, buffer)

    def test_membership_is_normalized(self) -> None:
        buffer = SelectionBuffer([Path("/tmp/a/../b.txt")])

        self.assertIn(Path("/tmp/b.txt"), buffer)
        self.assertIn("/tmp/./b.txt", buffer)
        self.assertNotIn(42, buffer)

    def test_iteration_is_sorted_and_clear_empties(self) -> None:
        buffer = SelectionBuffer([Path("/z"), Path("/a"), Path("/m")])

        self.assertEqual(list(buffer), [Path("/a"), Path("/m"), Path("/z")])
        self.assertTrue(buffer)
        buffer.clear()
        self.assertFalse(buffer)
        self.assertEqual(len(buffer), 0)

    def test_discard_many_keeps_unlisted_paths(self) -> None:
        buffer = SelectionBuffer([Path("/a"), Path("/b"), Path("/c")])

        buffer.discard_many([Path("/a"), Path("/c"), Path("/missing")])

        self.assertEqual(list(buffer), [Path("/b")])


if __name__ == "__main__":
    unittest.main()
