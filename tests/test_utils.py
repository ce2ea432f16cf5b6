"""Tests for teleport_ui.tui.utils -- terminal text utilities."""

from __future__ import annotations

from teleport_ui.tui.utils import strip_ansi, truncate_to_width, visible_width


class TestVisibleWidth:
    """Measure the visible terminal width of text."""

    def test_plain_ascii(self) -> None:
        assert visible_width("hello") == 5

    def test_empty_string(self) -> None:
        assert visible_width("") == 0

    def test_ansi_codes_do_not_count(self) -> None:
        assert visible_width("\x1b[1mhi\x1b[0m") == 2

    def test_truecolor_codes_do_not_count(self) -> None:
        assert visible_width("\x1b[38;2;255;0;255;1mabc\x1b[0m") == 3

    def test_wide_cjk_characters_count_as_two(self) -> None:
        assert visible_width("世") == 2

    def test_mixed_ascii_and_wide(self) -> None:
        assert visible_width("A世B") == 4

    def test_combining_mark_has_no_width(self) -> None:
        assert visible_width("é") == 1


class TestTruncateToWidth:
    def test_short_text_unchanged(self) -> None:
        assert truncate_to_width("hello", 10) == "hello"

    def test_truncates_with_ellipsis(self) -> None:
        assert truncate_to_width("hello world", 8) == "hello..."

    def test_custom_ellipsis(self) -> None:
        assert truncate_to_width("hello world", 6, "") == "hello "

    def test_zero_width(self) -> None:
        assert truncate_to_width("hello", 0) == ""

    def test_keeps_ansi_and_resets(self) -> None:
        text = "\x1b[1mhello world\x1b[0m"
        result = truncate_to_width(text, 8)
        assert result.startswith("\x1b[1m")
        assert result.endswith("\x1b[0m...")
        assert strip_ansi(result) == "hello..."
        assert visible_width(result) == 8

    def test_wide_characters_not_split(self) -> None:
        result = truncate_to_width("世世世", 4, "")
        assert result == "世世"
