"""User settings with YAML persistence."""

from __future__ import annotations

import os
import tempfile
from contextlib import suppress
from dataclasses import dataclass
from typing import Any

import yaml

from config import Config
from utils import get_logger
from utils.runtime import get_settings_file

logger = get_logger(__name__)

SETTINGS_HEADER = """# skillsync settings
#
# commands_dir: directory holding one <name>.md file per skill
# meta_file: JSON file with tags per skill and the git remote
# remote: git remote URL used by `skillsync push` / `skillsync pull`

"""


def _coerce_str(value: Any, default: str) -> str:
    if value is None:
        return default
    value = str(value).strip()
    return value or default


@dataclass
class SkillSettings:
    """Locations and remote used by the skill manager."""

    commands_dir: str = Config.COMMANDS_DIR
    meta_file: str = Config.META_FILE
    remote: str = ""

    def __post_init__(self) -> None:
        self.commands_dir = os.path.expanduser(self.commands_dir)
        self.meta_file = os.path.expanduser(self.meta_file)

    def to_dict(self) -> dict[str, str]:
        return {
            "commands_dir": self.commands_dir,
            "meta_file": self.meta_file,
            "remote": self.remote,
        }


class SettingsStore:
    """Load and save ``SkillSettings`` from a YAML file."""

    SETTINGS_PATH = get_settings_file()

    def __init__(self, settings_path: str | None = None):
        self.settings_path = settings_path or self.SETTINGS_PATH

    def _atomic_write(self, content: str) -> None:
        directory = os.path.dirname(self.settings_path) or "."
        os.makedirs(directory, exist_ok=True)

        fd, tmp_path = tempfile.mkstemp(prefix=".settings.", suffix=".tmp", dir=directory)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(content)
            os.replace(tmp_path, self.settings_path)
        finally:
            with suppress(OSError):
                os.unlink(tmp_path)

    def load(self) -> SkillSettings:
        """Read settings, using config defaults for anything missing.

        A missing file is not created here; it appears on the first save.
        """
        if not os.path.exists(self.settings_path):
            return SkillSettings()

        try:
            with open(self.settings_path, encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            logger.warning(f"Failed to read settings from {self.settings_path}: {e}")
            return SkillSettings()

        if not isinstance(data, dict):
            logger.warning(f"Invalid settings format in {self.settings_path}, using defaults")
            return SkillSettings()

        settings = SkillSettings(
            commands_dir=_coerce_str(data.get("commands_dir"), Config.COMMANDS_DIR),
            meta_file=_coerce_str(data.get("meta_file"), Config.META_FILE),
            remote=_coerce_str(data.get("remote"), ""),
        )
        logger.info(f"Loaded settings from {self.settings_path}")
        return settings

    def save(self, settings: SkillSettings) -> None:
        body = yaml.safe_dump(settings.to_dict(), sort_keys=False, allow_unicode=True)
        self._atomic_write(SETTINGS_HEADER + body)
        logger.info(f"Saved settings to {self.settings_path}")
