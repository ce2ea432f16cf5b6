"""Finder keybindings manager."""

from __future__ import annotations

from typing import Literal, Mapping, Union

from teleport_ui.tui.keys import Key, KeyId, matches_key

FinderAction = Literal[
    "selectUp",
    "selectDown",
    "selectConfirm",
    "selectCancel",
    "deleteCharBackward",
]

FINDER_ACTIONS: tuple[FinderAction, ...] = (
    "selectUp",
    "selectDown",
    "selectConfirm",
    "selectCancel",
    "deleteCharBackward",
)

KeybindingsConfig = Mapping[str, Union[KeyId, list[KeyId]]]

DEFAULT_FINDER_KEYBINDINGS: dict[FinderAction, KeyId | list[KeyId]] = {
    "selectUp": [Key.up, Key.ctrl("k")],
    "selectDown": [Key.down, Key.ctrl("j")],
    "selectConfirm": Key.enter,
    "selectCancel": [Key.escape, Key.ctrl("c")],
    "deleteCharBackward": Key.backspace,
}


class FinderKeybindingsManager:
    """Maps finder actions to the keys that trigger them."""

    def __init__(self, config: KeybindingsConfig | None = None) -> None:
        self._action_to_keys: dict[FinderAction, list[KeyId]] = {}
        self._build_maps(config or {})

    def _build_maps(self, config: KeybindingsConfig) -> None:
        self._action_to_keys.clear()

        # Start with defaults
        for action, keys in DEFAULT_FINDER_KEYBINDINGS.items():
            key_array = keys if isinstance(keys, list) else [keys]
            self._action_to_keys[action] = list(key_array)

        # Override with user config
        for action, keys in config.items():
            if action not in FINDER_ACTIONS:
                raise ValueError(f"Unknown finder action: {action!r}")
            key_array = keys if isinstance(keys, list) else [keys]
            self._action_to_keys[action] = list(key_array)  # type: ignore[index]

    def matches(self, data: str, action: FinderAction) -> bool:
        """Check if input matches a specific action."""
        return any(matches_key(data, key) for key in self.get_keys(action))

    def action_for(self, data: str) -> FinderAction | None:
        """Return the first action bound to *data*, if any."""
        for action in FINDER_ACTIONS:
            if self.matches(data, action):
                return action
        return None

    def get_keys(self, action: FinderAction) -> list[KeyId]:
        """Get keys bound to an action."""
        return self._action_to_keys.get(action, [])