from __future__ import annotations

import unittest

from lazynav.ansi import clip_ansi_line, display_width, fit_ansi_line, strip_ansi


class AnsiHelpersTests(unittest.TestCase):
    def test_clip_preserves_escape_sequences(self) -> None:
        text = "\033[31mred text\033[0m"

        clipped = clip_ansi_line(text, 3)

        self.assertEqual(clipped, "\033[31mred")

    def test_clip_expands_tabs_and_respects_wide_chars(self) -> None:
        self.assertEqual(clip_ansi_line("a\tb", 10), "a       b")
        self.assertEqual(clip_ansi_line("漢字x", 3), "漢")

    def test_fit_pads_to_width(self) -> None:
        fitted = fit_ansi_line("\033[1mab\033[0m", 5)

        self.assertEqual(strip_ansi(fitted), "ab   ")
        self.assertEqual(display_width(fitted), 5)

    def test_zero_width_is_empty(self) -> None:
        self.assertEqual(clip_ansi_line("abc", 0), "")
        self.assertEqual(fit_ansi_line("abc", 0), "")


if __name__ == "__main__":
    unittest.main()
