"""Configuration management for skillsync."""

import os

# Define path constants directly to avoid circular imports with utils
# (utils.terminal_ui imports Config, and utils.runtime is in the utils package)
_RUNTIME_DIR = os.path.join(os.path.expanduser("~"), ".skillsync")
_CONFIG_FILE = os.path.join(_RUNTIME_DIR, "config")

# Default configuration template
_DEFAULT_CONFIG = """\
# skillsync Configuration

# Where skill files live and where the tag metadata is kept.
# These are defaults; `skillsync remote` and settings.yaml override them.
COMMANDS_DIR=~/.claude/commands
META_FILE=~/.claude/skill_meta.json
SKILL_EXTENSION=.md

# Git sync
GIT_BRANCH=main
GIT_COMMIT_MESSAGE=Update skills via skillsync

# Optional settings
LOG_LEVEL=DEBUG
TUI_THEME=dark
"""


def _load_config(path: str) -> dict[str, str]:
    """Parse a KEY=VALUE config file, skipping comments and blank lines."""
    cfg: dict[str, str] = {}
    if not os.path.isfile(path):
        return cfg
    with open(path, encoding="utf-8") as f:
        for line in f:
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            if "=" not in line:
                continue
            key, _, value = line.partition("=")
            # Strip inline comments (# ...) from the value
            if "#" in value:
                value = value[: value.index("#")]
            cfg[key.strip()] = value.strip()
    return cfg


def _ensure_config():
    """Ensure ~/.skillsync/config exists, create with defaults if not."""
    if not os.path.exists(_CONFIG_FILE):
        os.makedirs(_RUNTIME_DIR, exist_ok=True)
        with open(_CONFIG_FILE, "w", encoding="utf-8") as f:
            f.write(_DEFAULT_CONFIG)


# Ensure config exists and load it
_ensure_config()
_cfg = _load_config(_CONFIG_FILE)


class Config:
    """Configuration for skillsync.

    All configuration is centralized here. Access config values directly via Config.XXX.
    """

    # Storage defaults (settings.yaml takes precedence once written)
    COMMANDS_DIR = os.path.expanduser(
        _cfg.get("COMMANDS_DIR") or os.path.join("~", ".claude", "commands")
    )
    META_FILE = os.path.expanduser(
        _cfg.get("META_FILE") or os.path.join("~", ".claude", "skill_meta.json")
    )
    SKILL_EXTENSION = _cfg.get("SKILL_EXTENSION", ".md")

    # Git sync
    GIT_BRANCH = _cfg.get("GIT_BRANCH", "main")
    GIT_COMMIT_MESSAGE = _cfg.get("GIT_COMMIT_MESSAGE") or "Update skills via skillsync"
    GIT_IGNORE_PATTERNS = [".DS_Store", "Thumbs.db", "*.swp", "*~"]

    # Logging Configuration
    # Note: Logging is controlled via --verbose flag
    LOG_LEVEL = _cfg.get("LOG_LEVEL", "DEBUG").upper()

    # TUI Configuration
    TUI_THEME = _cfg.get("TUI_THEME", "dark")  # "dark" or "light"
    TUI_PREVIEW_LINES = int(_cfg.get("TUI_PREVIEW_LINES", "40"))

    @classmethod
    def validate(cls):
        """Validate required configuration.

        Raises:
            ValueError: If required configuration is missing
        """
        if not cls.SKILL_EXTENSION:
            raise ValueError(
                "SKILL_EXTENSION not set. Please set it in ~/.skillsync/config.\n"
                "Example: SKILL_EXTENSION=.md"
            )
        if not cls.GIT_BRANCH:
            raise ValueError(
                "GIT_BRANCH not set. Please set it in ~/.skillsync/config.\n"
                "Example: GIT_BRANCH=main"
            )
