"""Configuration management for teleport-ui. Stored at ~/.teleport-ui/config.json."""

from __future__ import annotations

import json
import os
import sys
from dataclasses import dataclass, field
from pathlib import Path


@dataclass
class Config:
    tsh: str = "tsh"
    log_level: str = "warning"
    keybindings: dict[str, str | list[str]] = field(default_factory=dict)


def config_from_dict(data: dict) -> Config:
    """Deserialize a Config from a JSON-compatible dict."""
    return Config(
        tsh=data.get("tsh") or "tsh",
        log_level=data.get("logLevel") or "warning",
        keybindings=dict(data.get("keybindings") or {}),
    )


def config_to_dict(config: Config) -> dict:
    """Serialize a Config to a JSON-compatible dict."""
    return {
        "tsh": config.tsh,
        "logLevel": config.log_level,
        "keybindings": config.keybindings,
    }


def _get_config_dir() -> Path:
    return Path(os.environ.get("TELEPORT_UI_CONFIG_DIR", Path.home() / ".teleport-ui"))


def _get_config_path() -> Path:
    return _get_config_dir() / "config.json"


def load_config() -> Config:
    config_path = _get_config_path()
    if not config_path.exists():
        return Config()
    try:
        data = json.loads(config_path.read_text())
        if not isinstance(data, dict):
            raise ValueError("top-level value must be an object")
        return config_from_dict(data)
    except (OSError, ValueError) as e:
        print(f"Error reading config {config_path}: {e}", file=sys.stderr)
        return Config()


def save_config(config: Config) -> None:
    config_dir = _get_config_dir()
    config_dir.mkdir(parents=True, exist_ok=True)
    (config_dir / "config.json").write_text(
        json.dumps(config_to_dict(config), indent=2)
    )
