"""Viewport windowing: which slice of the filtered list is on screen."""

from __future__ import annotations

# Prompt line, blank line, trailing blank line, footer, and one spare line.
CHROME_ROWS = 5
DEFAULT_VISIBLE_ROWS = 10


def available_rows(height: int) -> int:
    """Rows left for list items on a terminal *height* lines tall.

    Unknown (``0``) or too-small heights fall back to
    ``DEFAULT_VISIBLE_ROWS``.
    """
    rows = height - CHROME_ROWS
    if rows < 1:
        return DEFAULT_VISIBLE_ROWS
    return rows


def visible_window(cursor: int, total: int, rows: int) -> tuple[int, int]:
    """Return ``(start, end)`` so that the cursor stays visible.

    When everything fits, the whole list is shown. Otherwise the cursor is
    centred as far as the list edges allow.
    """
    if total <= 0:
        return (0, 0)
    rows = max(rows, 1)
    if total <= rows:
        return (0, total)

    cursor = max(0, min(cursor, total - 1))
    start = max(0, min(cursor - rows // 2, total - rows))
    end = min(start + rows, total)
    return (start, end)
