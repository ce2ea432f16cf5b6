"""Event loop driver: runs a fuzzy finder session on a terminal.

The driver is the only stateful, side-effecting piece. Terminal callbacks
only decode input and enqueue finder events; a single coroutine applies one
event at a time and redraws the frame in place.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Callable, Sequence, TypeVar

from teleport_ui.tui.finder import (
    Cancel,
    Commit,
    DeleteChar,
    Finder,
    FinderEvent,
    InsertChar,
    MoveDown,
    MoveUp,
    Resize,
)
from teleport_ui.tui.keybindings import FinderAction, FinderKeybindingsManager
from teleport_ui.tui.keys import is_paste, printable_char
from teleport_ui.tui.render import DEFAULT_THEME, FinderTheme, render
from teleport_ui.tui.terminal import ProcessTerminal, Terminal

logger = logging.getLogger(__name__)

T = TypeVar("T")

_ACTION_EVENTS: dict[FinderAction, FinderEvent] = {
    "selectUp": MoveUp(),
    "selectDown": MoveDown(),
    "selectConfirm": Commit(),
    "selectCancel": Cancel(),
    "deleteCharBackward": DeleteChar(),
}


def decode_input(
    data: str, keybindings: FinderKeybindingsManager
) -> FinderEvent | None:
    """Translate one raw input sequence into a finder event.

    Bound keys win over printable characters; pastes and unknown sequences
    yield ``None``.
    """
    if is_paste(data):
        return None

    action = keybindings.action_for(data)
    if action is not None:
        return _ACTION_EVENTS[action]

    char = printable_char(data)
    if char is not None:
        return InsertChar(char)
    return None


class FrameWriter:
    """Redraws a frame in place below the cursor's starting row."""

    def __init__(self, terminal: Terminal) -> None:
        self._terminal = terminal
        self._height = 0

    def draw(self, lines: list[str]) -> None:
        self._rewind()
        self._terminal.write("\r\n".join(lines))
        self._height = len(lines)

    def clear(self) -> None:
        self._rewind()
        self._height = 0

    def _rewind(self) -> None:
        if self._height == 0:
            return
        self._terminal.move_by(-(self._height - 1))
        self._terminal.write("\r")
        self._terminal.clear_from_cursor()


async def run_fuzzy_finder(
    items: Sequence[T],
    *,
    terminal: Terminal | None = None,
    get_text: Callable[[T], str] = str,
    theme: FinderTheme = DEFAULT_THEME,
    keybindings: FinderKeybindingsManager | None = None,
) -> T | None:
    """Let the user pick one of *items*; return it, or ``None`` on cancel.

    Raises :class:`~teleport_ui.tui.terminal.TerminalError` if the terminal
    cannot be made interactive. The terminal is restored on every exit path.
    """
    if terminal is None:
        terminal = ProcessTerminal()
    if keybindings is None:
        keybindings = FinderKeybindingsManager()

    finder = Finder(items, get_text=get_text)
    events: asyncio.Queue[FinderEvent] = asyncio.Queue()
    frame = FrameWriter(terminal)

    def on_input(data: str) -> None:
        event = decode_input(data, keybindings)
        if event is None:
            logger.debug("ignored input %r", data)
            return
        events.put_nowait(event)

    def on_resize() -> None:
        events.put_nowait(Resize(terminal.rows, terminal.columns))

    def on_eof() -> None:
        events.put_nowait(Cancel())

    terminal.start(on_input, on_resize, on_eof)
    try:
        try:
            finder.handle(Resize(terminal.rows, terminal.columns))
            terminal.hide_cursor()
            frame.draw(render(finder.state, theme))

            while not finder.done:
                state = finder.handle(await events.get())
                if not state.done:
                    frame.draw(render(state, theme))
        finally:
            frame.clear()
            terminal.show_cursor()
    finally:
        terminal.stop()

    return finder.selected


def select(items: Sequence[T], **kwargs) -> T | None:
    """Synchronous wrapper around :func:`run_fuzzy_finder`."""
    return asyncio.run(run_fuzzy_finder(items, **kwargs))
