"""Tests for teleport_ui.config."""

from __future__ import annotations

import json

import pytest

from teleport_ui.config import Config, config_from_dict, config_to_dict, load_config, save_config


@pytest.fixture
def config_dir(tmp_path, monkeypatch):
    path = tmp_path / "conf"
    monkeypatch.setenv("TELEPORT_UI_CONFIG_DIR", str(path))
    return path


class TestConfigDict:
    def test_defaults_from_empty(self):
        assert config_from_dict({}) == Config()

    def test_reads_camel_case_keys(self):
        config = config_from_dict(
            {"tsh": "/opt/tsh", "logLevel": "debug", "keybindings": {"selectUp": "ctrl+p"}}
        )
        assert config.tsh == "/opt/tsh"
        assert config.log_level == "debug"
        assert config.keybindings == {"selectUp": "ctrl+p"}

    def test_to_dict(self):
        assert config_to_dict(Config()) == {
            "tsh": "tsh",
            "logLevel": "warning",
            "keybindings": {},
        }


class TestLoadSave:
    def test_missing_file_gives_defaults(self, config_dir):
        assert load_config() == Config()

    def test_save_then_load(self, config_dir):
        save_config(Config(tsh="/usr/local/bin/tsh", keybindings={"selectDown": ["ctrl+n"]}))
        assert (config_dir / "config.json").exists()
        loaded = load_config()
        assert loaded.tsh == "/usr/local/bin/tsh"
        assert loaded.keybindings == {"selectDown": ["ctrl+n"]}

    def test_invalid_json_falls_back(self, config_dir, capsys):
        config_dir.mkdir()
        (config_dir / "config.json").write_text("{not json")
        assert load_config() == Config()
        assert "Error reading config" in capsys.readouterr().err

    def test_non_object_falls_back(self, config_dir, capsys):
        config_dir.mkdir()
        (config_dir / "config.json").write_text(json.dumps(["tsh"]))
        assert load_config() == Config()
        assert "must be an object" in capsys.readouterr().err
