"""Fuzzy matching utilities.

Matches if all query characters appear in order (not necessarily consecutive).
Matching is greedy and leftmost: each query character takes the earliest
remaining candidate character, which keeps highlighting deterministic.
"""

from __future__ import annotations

from typing import Callable, Sequence, TypeVar

T = TypeVar("T")


def _fold(ch: str) -> str:
    # Single-character folding keeps indices aligned with the original text
    # even for characters whose lowercase form is longer (e.g. "İ").
    lowered = ch.lower()
    return lowered if len(lowered) == 1 else ch


def highlight_positions(query: str, text: str) -> list[int]:
    """Return the indices in *text* that satisfy *query*, case-insensitively.

    The result is strictly increasing. Its length equals ``len(query)`` when
    the query matches and is shorter otherwise.
    """
    positions: list[int] = []
    if not query:
        return positions

    folded_query = [_fold(ch) for ch in query]
    query_index = 0

    for i, ch in enumerate(text):
        if query_index >= len(folded_query):
            break
        if _fold(ch) == folded_query[query_index]:
            positions.append(i)
            query_index += 1

    return positions


def fuzzy_match(query: str, text: str) -> bool:
    if not query:
        return True
    if len(query) > len(text):
        return False
    return len(highlight_positions(query, text)) == len(query)


def fuzzy_filter(
    items: Sequence[T], query: str, get_text: Callable[[T], str] = str
) -> Sequence[T]:
    """Keep the items whose text fuzzy-matches *query*, in original order.

    An empty query returns *items* itself.
    """
    if not query:
        return items

    return [item for item in items if fuzzy_match(query, get_text(item))]
