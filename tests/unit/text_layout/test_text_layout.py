"""Tests for width-aware truncation, breadcrumb packing, and justification.

Wide (CJK) characters are used throughout to make sure widths, not
character counts, drive every cut.
"""

from __future__ import annotations

import unittest
from datetime import datetime

from gridbrowser.ansi import display_width
from gridbrowser.listing import Entry
from gridbrowser.text_layout import (
    BREADCRUMB_ELLIPSIS,
    center_truncate,
    format_size,
    justify_with_gaps,
    path_breadcrumb,
    short_name,
    tile_lines,
)


class CenterTruncateTests(unittest.TestCase):
    def test_fitting_text_is_returned_unchanged(self) -> None:
        self.assertEqual(center_truncate("abc", 3), "abc")
        self.assertEqual(center_truncate("日本", 4), "日本")

    def test_odd_width_keeps_equal_head_and_tail(self) -> None:
        self.assertEqual(center_truncate("abcdefghij", 5), "ab…ij")

    def test_even_width_keeps_equal_head_and_tail(self) -> None:
        self.assertEqual(center_truncate("abcdefghij", 6), "ab…ij")
        self.assertEqual(center_truncate("abcdefghijklmnop", 10), "abcd…mnop")

    def test_wide_characters_are_never_split(self) -> None:
        result = center_truncate("日本語テキスト", 6)
        self.assertEqual(result, "日…ト")
        self.assertLessEqual(display_width(result), 6)

    def test_result_never_exceeds_width(self) -> None:
        samples = ["a" * 40, "日本語のファイル名です.txt", "mixed日本abc語", "é" * 30]
        for text in samples:
            for width in range(1, 30):
                with self.subTest(text=text, width=width):
                    result = center_truncate(text, width)
                    self.assertLessEqual(display_width(result), width)
                    if display_width(text) <= width:
                        self.assertEqual(result, text)

    def test_non_positive_width_yields_empty_string(self) -> None:
        self.assertEqual(center_truncate("abc", 0), "")


class ShortNameTests(unittest.TestCase):
    def test_fitting_name_is_unchanged(self) -> None:
        self.assertEqual(short_name("short", 10), "short")

    def test_long_name_keeps_prefix_and_suffix_dots(self) -> None:
        self.assertEqual(short_name("verylongfilename.txt", 10), "verylon...")

    def test_zero_width_uses_default_of_ten(self) -> None:
        self.assertEqual(short_name("verylongfilename.txt", 0), "verylon...")
        self.assertEqual(short_name("verylongfilename.txt"), "verylon...")

    def test_prefix_stops_before_wide_character_that_overflows(self) -> None:
        self.assertEqual(short_name("日本語テキスト", 8), "日本...")


class PathBreadcrumbTests(unittest.TestCase):
    def test_root_uses_short_marker(self) -> None:
        self.assertEqual(path_breadcrumb("/", 40), " /")
        self.assertEqual(path_breadcrumb("", 40), " /")

    def test_fitting_path_keeps_every_segment_in_order(self) -> None:
        path = "/usr/local/share/gridbrowser"
        result = path_breadcrumb(path, 80)
        self.assertEqual(result, " / usr / local / share / gridbrowser")
        self.assertEqual(result.split(" / ")[1:], ["usr", "local", "share", "gridbrowser"])

    def test_trailing_separator_is_ignored(self) -> None:
        self.assertEqual(path_breadcrumb("/usr/bin/", 80), " / usr / bin")

    def test_narrow_width_packs_minimally_from_both_ends(self) -> None:
        result = path_breadcrumb("/a/b/c/d/e", 10)
        self.assertEqual(result, " / a / ...")
        self.assertLessEqual(display_width(result), 10)

    def test_long_path_keeps_leading_context_and_leaf(self) -> None:
        result = path_breadcrumb("/home/user/projects/gridbrowser/src", 30)
        self.assertEqual(result, " / home / ... / src")

    def test_smaller_side_grows_first(self) -> None:
        result = path_breadcrumb("/a/b/c/d/e/f", 20)
        # " / a" then " / f" then " / b" fit in the 14 columns left over.
        self.assertEqual(result, " / a / b / ... / f")

    def test_marker_alone_when_no_room_for_segments(self) -> None:
        self.assertEqual(path_breadcrumb("/alpha/beta", 6), BREADCRUMB_ELLIPSIS)
        self.assertEqual(path_breadcrumb("/alpha/beta", 3), BREADCRUMB_ELLIPSIS)

    def test_result_never_exceeds_width_when_marker_fits(self) -> None:
        path = "/srv/データ/projects/very-long-directory-name/leaf"
        for width in range(7, 60):
            with self.subTest(width=width):
                self.assertLessEqual(display_width(path_breadcrumb(path, width)), width)


class JustifyWithGapsTests(unittest.TestCase):
    def test_empty_and_single_items(self) -> None:
        self.assertEqual(justify_with_gaps([], 10), "")
        self.assertEqual(justify_with_gaps(["only"], 10), "only")

    def test_date_and_size_fill_tile_width(self) -> None:
        result = justify_with_gaps(["2024-01-01", "12.0 KB"], 25)
        self.assertEqual(result, "2024-01-01        12.0 KB")
        self.assertEqual(display_width(result), 25)

    def test_remainder_goes_to_leftmost_gaps(self) -> None:
        self.assertEqual(justify_with_gaps(["a", "b", "c"], 8), "a   b  c")

    def test_overflow_keeps_one_space_per_gap(self) -> None:
        self.assertEqual(justify_with_gaps(["abcdef", "ghijkl"], 5), "abcdef ghijkl")

    def test_wide_items_are_measured_by_display_width(self) -> None:
        result = justify_with_gaps(["日本", "x"], 8)
        self.assertEqual(result, "日本   x")


class FormatSizeTests(unittest.TestCase):
    def test_bytes_below_one_kib(self) -> None:
        self.assertEqual(format_size(0), "0 B")
        self.assertEqual(format_size(1023), "1023 B")

    def test_binary_units_with_one_decimal(self) -> None:
        self.assertEqual(format_size(1024), "1.0 KB")
        self.assertEqual(format_size(1536), "1.5 KB")
        self.assertEqual(format_size(12 * 1024), "12.0 KB")
        self.assertEqual(format_size(1024**2), "1.0 MB")
        self.assertEqual(format_size(5 * 1024**3), "5.0 GB")


class TileLinesTests(unittest.TestCase):
    def test_file_tile_shows_tag_name_date_and_size(self) -> None:
        entry = Entry(
            name="notes.txt",
            path="/tmp/notes.txt",
            is_dir=False,
            size=12 * 1024,
            modified_at=datetime(2024, 1, 1, 12, 0),
        )
        self.assertEqual(
            tile_lines(entry, 25),
            ["", "[F] notes.txt", "", "2024-01-01        12.0 KB", ""],
        )

    def test_directory_tile_uses_dash_for_size_and_truncates_name(self) -> None:
        entry = Entry(
            name="a-directory-with-a-rather-long-name",
            path="/tmp/a-directory-with-a-rather-long-name",
            is_dir=True,
            size=4096,
            modified_at=datetime(2023, 6, 30, 8, 15),
        )
        lines = tile_lines(entry, 23)
        self.assertTrue(lines[1].startswith("[D] a-dir"))
        self.assertIn("…", lines[1])
        self.assertEqual(display_width(lines[1]), 23)
        self.assertEqual(lines[3], "2023-06-30" + " " * 12 + "-")


if __name__ == "__main__":
    unittest.main()
