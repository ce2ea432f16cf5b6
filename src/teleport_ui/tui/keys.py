"""Keyboard input parsing for terminal applications.

Turns raw terminal input (as split by ``StdinBuffer``) into key identifiers
such as ``"up"``, ``"ctrl+k"``, ``"enter"`` or ``"a"``. ``matches_key``
checks raw input against such an identifier.
"""

from __future__ import annotations

import re

# ---------------------------------------------------------------------------
# Type alias
# ---------------------------------------------------------------------------

KeyId = str


class Key:
    """Named key constants and the ctrl combinator."""

    escape = "escape"
    enter = "enter"
    tab = "tab"
    space = "space"
    backspace = "backspace"
    delete = "delete"
    home = "home"
    end = "end"
    page_up = "pageUp"
    page_down = "pageDown"
    up = "up"
    down = "down"
    left = "left"
    right = "right"

    @staticmethod
    def ctrl(key: str) -> str:
        return f"ctrl+{key}"


# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

MODIFIERS: dict[str, int] = {
    "shift": 1,
    "alt": 2,
    "ctrl": 4,
}

# Legacy escape sequences -> key names
LEGACY_KEY_SEQUENCES: dict[str, str] = {
    "\x1b[A": "up",
    "\x1b[B": "down",
    "\x1b[C": "right",
    "\x1b[D": "left",
    "\x1b[H": "home",
    "\x1b[F": "end",
    "\x1bOA": "up",
    "\x1bOB": "down",
    "\x1bOC": "right",
    "\x1bOD": "left",
    "\x1bOH": "home",
    "\x1bOF": "end",
    "\x1b[1~": "home",
    "\x1b[2~": "insert",
    "\x1b[3~": "delete",
    "\x1b[4~": "end",
    "\x1b[5~": "pageUp",
    "\x1b[6~": "pageDown",
    "\x1b[Z": "shift+tab",
}

_ALIASES: dict[str, str] = {
    "esc": "escape",
    "return": "enter",
}

# ESC [ 1 ; <modifier> <final>  e.g. "\x1b[1;5A" = ctrl+up
_MODIFIED_CURSOR_RE = re.compile(r"^\x1b\[1;(\d+)([ABCDHF])$")
# ESC [ <code> ; <modifier> ~   e.g. "\x1b[3;5~" = ctrl+delete
_MODIFIED_TILDE_RE = re.compile(r"^\x1b\[(\d+);(\d+)~$")

_CURSOR_FINALS: dict[str, str] = {
    "A": "up",
    "B": "down",
    "C": "right",
    "D": "left",
    "H": "home",
    "F": "end",
}

_TILDE_CODES: dict[str, str] = {
    "1": "home",
    "2": "insert",
    "3": "delete",
    "4": "end",
    "5": "pageUp",
    "6": "pageDown",
}

_BRACKETED_PASTE_START = "\x1b[200~"


def _modifier_prefix(modifier: int) -> str:
    mod = modifier - 1
    prefix = ""
    if mod & MODIFIERS["ctrl"]:
        prefix += "ctrl+"
    if mod & MODIFIERS["shift"]:
        prefix += "shift+"
    if mod & MODIFIERS["alt"]:
        prefix += "alt+"
    return prefix


def is_paste(data: str) -> bool:
    """Return ``True`` for bracketed-paste input."""
    return data.startswith(_BRACKETED_PASTE_START)


# ---------------------------------------------------------------------------
# parse_key: determine what key was pressed from raw input
# ---------------------------------------------------------------------------


def parse_key(data: str) -> KeyId | None:  # noqa: C901
    """Parse raw terminal input and return the key identifier, or ``None``.

    Printable characters are returned as themselves (case preserved), so
    ``"A"`` and ``"a"`` are distinct identifiers.
    """
    if not data or is_paste(data):
        return None

    if data in LEGACY_KEY_SEQUENCES:
        return LEGACY_KEY_SEQUENCES[data]

    match = _MODIFIED_CURSOR_RE.match(data)
    if match:
        return _modifier_prefix(int(match.group(1))) + _CURSOR_FINALS[match.group(2)]

    match = _MODIFIED_TILDE_RE.match(data)
    if match and match.group(1) in _TILDE_CODES:
        return _modifier_prefix(int(match.group(2))) + _TILDE_CODES[match.group(1)]

    # --- Simple single-byte keys ---
    if data == "\x1b":
        return "escape"
    if data == "\r":
        return "enter"
    # Raw mode disables ICRNL, so a bare LF can only come from ctrl+j.
    if data == "\n":
        return "ctrl+j"
    if data == "\t":
        return "tab"
    if data == " ":
        return "space"
    if data == "\x7f" or data == "\x08":
        return "backspace"
    if data == "\x00":
        return "ctrl+space"

    # --- Ctrl + letter (0x01 - 0x1a) ---
    if len(data) == 1 and 1 <= ord(data) <= 26:
        return "ctrl+" + chr(ord(data) + ord("a") - 1)

    # --- Alt + key (ESC prefix) ---
    if len(data) == 2 and data[0] == "\x1b":
        inner = parse_key(data[1])
        if inner is not None:
            return "alt+" + inner
        return None

    # --- Plain printable character ---
    if len(data) == 1 and data.isprintable():
        return data

    return None


def normalize_key_id(key_id: KeyId) -> KeyId:
    """Lower-case modifiers and resolve aliases (``esc`` -> ``escape``)."""
    parts = key_id.split("+")
    if len(parts) > 1 and parts[-1] == "":
        # The key itself is "+", e.g. "ctrl++"
        parts = [*parts[:-2], "+"]
    *mods, key = parts
    mod_set = {m.lower() for m in mods}
    key = _ALIASES.get(key.lower(), key)
    if "ctrl" in mod_set and len(key) == 1:
        key = key.lower()
    order = [m for m in ("ctrl", "shift", "alt") if m in mod_set]
    return "+".join([*order, key])


def matches_key(data: str, key_id: KeyId) -> bool:
    """Return ``True`` if raw terminal *data* is the key named *key_id*."""
    parsed = parse_key(data)
    if parsed is None:
        return False
    return parsed == normalize_key_id(key_id)


def printable_char(data: str) -> str | None:
    """Return *data* if it is exactly one printable character."""
    if len(data) == 1 and data.isprintable():
        return data
    return None
