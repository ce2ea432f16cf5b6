"""Tests for frame rendering (teleport_ui.tui.render)."""

from __future__ import annotations

from teleport_ui.tui.finder import Finder, InsertChar, MoveDown, Resize
from teleport_ui.tui.render import (
    DEFAULT_THEME,
    FOOTER,
    NO_MATCHES,
    PLAIN_THEME,
    FinderTheme,
    highlight,
    render,
)
from teleport_ui.tui.utils import strip_ansi, visible_width


def _brackets(text: str) -> str:
    return f"[{text}]"


MARK_THEME = FinderTheme(match=_brackets)


def _finder(items: list[str], query: str = "", rows: int = 24, columns: int = 0) -> Finder:
    finder = Finder(items)
    finder.handle(Resize(rows=rows, columns=columns))
    for ch in query:
        finder.handle(InsertChar(ch))
    return finder


class TestFrameLayout:
    def test_structure(self) -> None:
        lines = render(_finder(["alpha", "beta"]).state, PLAIN_THEME)
        assert lines == [
            "> ",
            "",
            "▶ alpha",
            "  beta",
            "",
            FOOTER,
        ]

    def test_prompt_shows_raw_query(self) -> None:
        lines = render(_finder(["Alpha"], query="AL").state, PLAIN_THEME)
        assert lines[0] == "> AL"

    def test_cursor_marker_follows_cursor(self) -> None:
        finder = _finder(["a", "b", "c"])
        finder.handle(MoveDown())
        lines = render(finder.state, PLAIN_THEME)
        assert lines[2:5] == ["  a", "▶ b", "  c"]

    def test_no_matches_placeholder(self) -> None:
        lines = render(_finder(["alpha"], query="z").state, PLAIN_THEME)
        assert lines == ["> z", "", NO_MATCHES, "", FOOTER]

    def test_footer_documents_keys(self) -> None:
        assert "navigate" in FOOTER
        assert "enter: select" in FOOTER
        assert "esc: cancel" in FOOTER

    def test_render_does_not_mutate_state(self) -> None:
        finder = _finder(["alpha", "beta"], query="a")
        before = finder.state
        render(before)
        assert finder.state is before
        assert finder.state == before


class TestHighlighting:
    def test_matched_positions_are_styled(self) -> None:
        lines = render(_finder(["alpha", "gamma"], query="aa").state, MARK_THEME)
        assert lines[2] == "▶ [a]lph[a]"
        assert lines[3] == "  g[a]mm[a]"

    def test_empty_query_has_no_highlight(self) -> None:
        assert highlight("alpha", "", _brackets) == "alpha"

    def test_highlight_keeps_original_casing(self) -> None:
        assert highlight("Prod-DB", "pb", _brackets) == "[P]rod-D[B]"

    def test_default_theme_uses_ansi(self) -> None:
        lines = render(_finder(["alpha"], query="a").state, DEFAULT_THEME)
        assert "\x1b[" in lines[2]
        assert strip_ansi(lines[2]) == "▶ alpha"
        assert strip_ansi(lines[0]) == "> a"


class TestWindowing:
    def test_long_list_is_windowed_around_cursor(self) -> None:
        items = [f"item{i:02d}" for i in range(50)]
        finder = _finder(items, rows=10)
        for _ in range(25):
            finder.handle(MoveDown())
        lines = render(finder.state, PLAIN_THEME)
        item_lines = lines[2:-2]
        assert len(item_lines) == 5
        assert "▶ item25" in item_lines
        assert item_lines[0] == "  item23"

    def test_unknown_height_uses_default_rows(self) -> None:
        items = [f"item{i:02d}" for i in range(50)]
        finder = _finder(items, rows=0)
        lines = render(finder.state, PLAIN_THEME)
        assert len(lines[2:-2]) == 10


class TestWidthTruncation:
    def test_lines_fit_terminal_width(self) -> None:
        finder = _finder(["a" * 100, "b" * 100], columns=20)
        for line in render(finder.state, DEFAULT_THEME):
            assert visible_width(line) <= 20

    def test_no_truncation_when_width_unknown(self) -> None:
        finder = _finder(["a" * 100], columns=0)
        lines = render(finder.state, PLAIN_THEME)
        assert lines[2] == "▶ " + "a" * 100


class TestShortTerminal:
    def test_frame_never_taller_than_terminal(self) -> None:
        items = [f"item{i:02d}" for i in range(30)]
        for rows in range(1, 13):
            lines = render(_finder(items, rows=rows).state, PLAIN_THEME)
            assert len(lines) <= rows, rows

    def test_five_rows_keeps_whole_chrome(self) -> None:
        items = [f"item{i:02d}" for i in range(30)]
        lines = render(_finder(items, rows=5).state, PLAIN_THEME)
        assert lines == ["> ", "", "▶ item00", "", FOOTER]

    def test_spacing_dropped_before_footer(self) -> None:
        items = [f"item{i:02d}" for i in range(30)]
        lines = render(_finder(items, rows=4).state, PLAIN_THEME)
        assert lines == ["> ", "", "▶ item00", FOOTER]
        lines = render(_finder(items, rows=3).state, PLAIN_THEME)
        assert lines == ["> ", "▶ item00", FOOTER]

    def test_prompt_and_cursor_row_survive(self) -> None:
        finder = _finder([f"item{i:02d}" for i in range(30)], query="1", rows=2)
        finder.handle(MoveDown())
        assert render(finder.state, PLAIN_THEME) == ["> 1", "▶ item10"]
