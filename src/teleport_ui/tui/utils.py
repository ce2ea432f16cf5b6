"""Terminal text utilities: ANSI stripping and visible width measurement."""

from __future__ import annotations

import re
import unicodedata

import grapheme
import wcwidth as _wcwidth

# CSI sequences: ESC[ <params> <final byte>
_ANSI_RE = re.compile(r"\x1b\[[0-9;]*[A-Za-z]")

_width_cache: dict[str, int] = {}
_WIDTH_CACHE_MAX = 512


def strip_ansi(text: str) -> str:
    return _ANSI_RE.sub("", text)


def _grapheme_width(g: str) -> int:
    """Terminal columns taken by one grapheme cluster."""
    if not g:
        return 0

    cp = ord(g[0])
    if cp < 0x20 or 0x7F <= cp <= 0x9F:
        return 0

    if len(g) > 1:
        # VS16 and ZWJ sequences render as wide emoji
        if "\ufe0f" in g or "\u200d" in g:
            return 2
        if unicodedata.category(g[0]).startswith("M"):
            return 0

    return max(_wcwidth.wcwidth(g[0]), 0)


def visible_width(text: str) -> int:
    """Calculate the visible terminal width of *text*, ignoring ANSI codes."""
    if not text:
        return 0

    stripped = strip_ansi(text)
    if stripped.isascii() and stripped.isprintable():
        return len(stripped)

    cached = _width_cache.get(stripped)
    if cached is not None:
        return cached

    total = sum(_grapheme_width(g) for g in grapheme.graphemes(stripped))
    if len(_width_cache) >= _WIDTH_CACHE_MAX:
        _width_cache.clear()
    _width_cache[stripped] = total
    return total


def truncate_to_width(text: str, max_width: int, ellipsis: str = "...") -> str:
    """Truncate *text* to at most *max_width* visible columns.

    ANSI codes are kept whole and *ellipsis* is appended when anything was
    dropped. A styled result gets a reset code before the ellipsis so open
    styling cannot leak into the next line.
    """
    if max_width <= 0:
        return ""
    if visible_width(text) <= max_width:
        return text

    target = max_width - visible_width(ellipsis)
    if target <= 0:
        return ellipsis[:max_width]

    parts: list[str] = []
    cols = 0
    pos = 0
    for match in _ANSI_RE.finditer(text):
        cols, full = _take(text[pos : match.start()], cols, target, parts)
        if full:
            break
        parts.append(match.group(0))
        pos = match.end()
    else:
        _take(text[pos:], cols, target, parts)

    reset = "\x1b[0m" if _ANSI_RE.search(text) else ""
    return "".join(parts) + reset + ellipsis


def _take(chunk: str, cols: int, limit: int, out: list[str]) -> tuple[int, bool]:
    for g in grapheme.graphemes(chunk):
        width = _grapheme_width(g)
        if cols + width > limit:
            return cols, True
        out.append(g)
        cols += width
    return cols, False
