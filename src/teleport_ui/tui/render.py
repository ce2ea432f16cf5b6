"""Frame rendering for the fuzzy finder.

``render`` is a pure function from a ``FinderState`` to the list of lines
that make up one frame. Styling goes through a ``FinderTheme`` of plain
``str -> str`` callables, so tests can render with ``PLAIN_THEME`` and
assert on text alone.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from teleport_ui.tui.finder import FinderState
from teleport_ui.tui.fuzzy import highlight_positions
from teleport_ui.tui.utils import truncate_to_width
from teleport_ui.tui.viewport import available_rows, visible_window

PROMPT = "> "
CURSOR_MARKER = "▶ "
ROW_INDENT = "  "
NO_MATCHES = "  No matches"
FOOTER = "↑/↓: navigate • enter: select • esc: cancel"

_RESET = "\x1b[0m"

# Prompt, blank, blank, footer.
_FRAME_CHROME_LINES = 4


# ---------------------------------------------------------------------------
# Themes
# ---------------------------------------------------------------------------


def _identity(text: str) -> str:
    return text


def _style(fg: str, bg: str | None = None, bold: bool = False) -> Callable[[str], str]:
    """Build a styler for a ``#RRGGBB`` foreground (and optional background)."""
    codes = ["38;2;{};{};{}".format(*_hex_to_rgb(fg))]
    if bg is not None:
        codes.append("48;2;{};{};{}".format(*_hex_to_rgb(bg)))
    if bold:
        codes.append("1")
    prefix = f"\x1b[{';'.join(codes)}m"

    def apply(text: str) -> str:
        # Re-open after inner resets so nested styling keeps the outer colour.
        return prefix + text.replace(_RESET, _RESET + prefix) + _RESET

    return apply


def _hex_to_rgb(color: str) -> tuple[int, int, int]:
    value = color.lstrip("#")
    return (int(value[0:2], 16), int(value[2:4], 16), int(value[4:6], 16))


@dataclass
class FinderTheme:
    prompt: Callable[[str], str] = _identity
    selected: Callable[[str], str] = _identity
    normal: Callable[[str], str] = _identity
    match: Callable[[str], str] = _identity
    no_match: Callable[[str], str] = _identity
    footer: Callable[[str], str] = _identity


PLAIN_THEME = FinderTheme()

DEFAULT_THEME = FinderTheme(
    prompt=_style("#00FF00", bold=True),
    selected=_style("#7D56F4", bg="#3C3C3C", bold=True),
    normal=_style("#FFFFFF"),
    match=_style("#FF00FF", bold=True),
    no_match=_style("#888888"),
    footer=_style("#666666"),
)


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------


def highlight(text: str, query: str, style: Callable[[str], str]) -> str:
    """Apply *style* to each character of *text* matched by *query*."""
    positions = set(highlight_positions(query, text))
    if not positions:
        return text
    return "".join(
        style(ch) if i in positions else ch for i, ch in enumerate(text)
    )


def render(state: FinderState, theme: FinderTheme = DEFAULT_THEME) -> list[str]:
    """Render one frame. It is never taller than ``state.rows`` when that is known."""
    window_rows = available_rows(state.rows)
    if state.rows > 0:
        window_rows = min(window_rows, max(state.rows - _FRAME_CHROME_LINES, 1))

    lines: list[str] = [theme.prompt(PROMPT) + state.query, ""]

    if state.filtered:
        start, end = visible_window(state.cursor, len(state.filtered), window_rows)
        for i in range(start, end):
            text = highlight(
                state.get_text(state.filtered[i]), state.query, theme.match
            )
            if i == state.cursor:
                lines.append(theme.selected(CURSOR_MARKER + text))
            else:
                lines.append(theme.normal(ROW_INDENT + text))
    else:
        lines.append(theme.no_match(NO_MATCHES))

    lines.append("")
    lines.append(theme.footer(FOOTER))

    if state.rows > 0:
        lines = _fit_height(lines, state.rows)
    if state.columns > 0:
        lines = [truncate_to_width(line, state.columns) for line in lines]
    return lines


def _fit_height(lines: list[str], height: int) -> list[str]:
    # Drop the spacer above the footer, then the one below the prompt, then
    # the footer. The prompt and the cursor row go last.
    for index in (-2, 1, -1):
        if len(lines) <= height:
            return lines
        del lines[index]
    return lines[:height]
