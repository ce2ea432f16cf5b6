"""Selection state machine for the fuzzy finder.

``FinderState`` is immutable; ``apply_event`` maps ``(state, event)`` to the
next state. ``Finder`` holds the single mutable reference for a running
session.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Callable, Generic, TypeVar, Union

from teleport_ui.tui.fuzzy import fuzzy_filter

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Phase(Enum):
    EDITING = "editing"
    COMMITTED = "committed"
    CANCELLED = "cancelled"


# ---------------------------------------------------------------------------
# Events
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Cancel:
    pass


@dataclass(frozen=True)
class Commit:
    pass


@dataclass(frozen=True)
class MoveUp:
    pass


@dataclass(frozen=True)
class MoveDown:
    pass


@dataclass(frozen=True)
class DeleteChar:
    pass


@dataclass(frozen=True)
class InsertChar:
    char: str


@dataclass(frozen=True)
class Resize:
    rows: int
    columns: int


FinderEvent = Union[Cancel, Commit, MoveUp, MoveDown, DeleteChar, InsertChar, Resize]


# ---------------------------------------------------------------------------
# State
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class FinderState(Generic[T]):
    items: tuple[T, ...]
    filtered: tuple[T, ...]
    get_text: Callable[[T], str] = field(default=str, compare=False, repr=False)
    query: str = ""
    cursor: int = 0
    phase: Phase = Phase.EDITING
    selected: T | None = None
    rows: int = 0
    columns: int = 0

    @property
    def done(self) -> bool:
        return self.phase is not Phase.EDITING


def initial_state(
    items: list[T] | tuple[T, ...],
    get_text: Callable[[T], str] = str,
    rows: int = 0,
    columns: int = 0,
) -> FinderState[T]:
    view = tuple(items)
    return FinderState(
        items=view,
        filtered=view,
        get_text=get_text,
        rows=rows,
        columns=columns,
    )


def _refilter(state: FinderState[T], query: str) -> tuple[T, ...]:
    return tuple(fuzzy_filter(state.items, query, state.get_text))


def _is_printable_char(char: str) -> bool:
    return len(char) == 1 and char.isprintable()


def apply_event(state: FinderState[T], event: FinderEvent) -> FinderState[T]:  # noqa: C901
    """Return the state that follows *state* after *event*."""
    if state.done:
        return state

    if isinstance(event, Cancel):
        return replace(state, phase=Phase.CANCELLED)

    if isinstance(event, Commit):
        if state.filtered and 0 <= state.cursor < len(state.filtered):
            return replace(
                state,
                phase=Phase.COMMITTED,
                selected=state.filtered[state.cursor],
            )
        return state

    if isinstance(event, MoveUp):
        return replace(state, cursor=max(state.cursor - 1, 0))

    if isinstance(event, MoveDown):
        if not state.filtered:
            return state
        return replace(
            state, cursor=min(state.cursor + 1, len(state.filtered) - 1)
        )

    if isinstance(event, DeleteChar):
        if not state.query:
            return state
        query = state.query[:-1]
        filtered = _refilter(state, query)
        cursor = min(state.cursor, len(filtered) - 1) if filtered else 0
        return replace(state, query=query, filtered=filtered, cursor=cursor)

    if isinstance(event, InsertChar):
        if not _is_printable_char(event.char):
            return state
        query = state.query + event.char
        return replace(
            state, query=query, filtered=_refilter(state, query), cursor=0
        )

    if isinstance(event, Resize):
        return replace(state, rows=event.rows, columns=event.columns)

    return state


class Finder(Generic[T]):
    """Mutable holder for a finder session's current state."""

    def __init__(
        self,
        items: list[T] | tuple[T, ...],
        get_text: Callable[[T], str] = str,
        rows: int = 0,
        columns: int = 0,
    ) -> None:
        self.state: FinderState[T] = initial_state(
            items, get_text=get_text, rows=rows, columns=columns
        )

    def handle(self, event: FinderEvent) -> FinderState[T]:
        self.state = apply_event(self.state, event)
        if self.state.done:
            logger.debug("finder finished: %s", self.state.phase.value)
        return self.state

    @property
    def items(self) -> tuple[T, ...]:
        return self.state.items

    @property
    def filtered(self) -> tuple[T, ...]:
        return self.state.filtered

    @property
    def query(self) -> str:
        return self.state.query

    @property
    def cursor(self) -> int:
        return self.state.cursor

    @property
    def selected(self) -> T | None:
        return self.state.selected

    @property
    def done(self) -> bool:
        return self.state.done
