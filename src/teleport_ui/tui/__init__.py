"""Terminal fuzzy finder."""

from teleport_ui.tui.app import decode_input, run_fuzzy_finder, select
from teleport_ui.tui.finder import (
    Cancel,
    Commit,
    DeleteChar,
    Finder,
    FinderEvent,
    FinderState,
    InsertChar,
    MoveDown,
    MoveUp,
    Phase,
    Resize,
    apply_event,
    initial_state,
)
from teleport_ui.tui.fuzzy import fuzzy_filter, fuzzy_match, highlight_positions
from teleport_ui.tui.keybindings import (
    DEFAULT_FINDER_KEYBINDINGS,
    FinderKeybindingsManager,
)
from teleport_ui.tui.keys import Key, matches_key, parse_key
from teleport_ui.tui.render import DEFAULT_THEME, PLAIN_THEME, FinderTheme, render
from teleport_ui.tui.terminal import ProcessTerminal, Terminal, TerminalError
from teleport_ui.tui.viewport import available_rows, visible_window

__all__ = [
    # Driver
    "run_fuzzy_finder",
    "select",
    "decode_input",
    # State machine
    "Finder",
    "FinderState",
    "FinderEvent",
    "Phase",
    "Cancel",
    "Commit",
    "MoveUp",
    "MoveDown",
    "DeleteChar",
    "InsertChar",
    "Resize",
    "apply_event",
    "initial_state",
    # Matching
    "fuzzy_match",
    "fuzzy_filter",
    "highlight_positions",
    # Viewport
    "available_rows",
    "visible_window",
    # Rendering
    "render",
    "FinderTheme",
    "DEFAULT_THEME",
    "PLAIN_THEME",
    # Keys
    "Key",
    "parse_key",
    "matches_key",
    "DEFAULT_FINDER_KEYBINDINGS",
    "FinderKeybindingsManager",
    # Terminal
    "Terminal",
    "ProcessTerminal",
    "TerminalError",
]
