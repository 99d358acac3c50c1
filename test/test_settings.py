"""Tests for YAML-persisted user settings."""

import os

import yaml

from config import Config
from skills.settings import SettingsStore, SkillSettings


def test_missing_file_uses_config_defaults(tmp_path):
    store = SettingsStore(str(tmp_path / "settings.yaml"))
    settings = store.load()
    assert settings.commands_dir == Config.COMMANDS_DIR
    assert settings.meta_file == Config.META_FILE
    assert settings.remote == ""
    assert not (tmp_path / "settings.yaml").exists()


def test_save_and_load_round_trip(tmp_path):
    path = tmp_path / "nested" / "settings.yaml"
    store = SettingsStore(str(path))
    store.save(
        SkillSettings(
            commands_dir=str(tmp_path / "cmds"),
            meta_file=str(tmp_path / "meta.json"),
            remote="git@example.com:me/skills.git",
        )
    )

    content = path.read_text(encoding="utf-8")
    assert content.startswith("# skillsync settings")
    assert yaml.safe_load(content)["remote"] == "git@example.com:me/skills.git"

    loaded = store.load()
    assert loaded.commands_dir == str(tmp_path / "cmds")
    assert loaded.meta_file == str(tmp_path / "meta.json")
    assert loaded.remote == "git@example.com:me/skills.git"


def test_partial_file_fills_defaults(tmp_path):
    path = tmp_path / "settings.yaml"
    path.write_text("remote: https://example.com/s.git\n", encoding="utf-8")
    settings = SettingsStore(str(path)).load()
    assert settings.remote == "https://example.com/s.git"
    assert settings.commands_dir == Config.COMMANDS_DIR


def test_invalid_yaml_uses_defaults(tmp_path):
    path = tmp_path / "settings.yaml"
    path.write_text("remote: [unclosed\n", encoding="utf-8")
    assert SettingsStore(str(path)).load().remote == ""


def test_non_mapping_uses_defaults(tmp_path):
    path = tmp_path / "settings.yaml"
    path.write_text("- just\n- a list\n", encoding="utf-8")
    assert SettingsStore(str(path)).load() == SkillSettings()


def test_home_is_expanded():
    settings = SkillSettings(commands_dir="~/cmds", meta_file="~/meta.json")
    assert settings.commands_dir == os.path.join(os.path.expanduser("~"), "cmds")
    assert not settings.meta_file.startswith("~")
