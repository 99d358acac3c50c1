"""Utility modules for skillsync."""

from . import terminal_ui
from .logger import get_log_file_path, get_logger, setup_logger

# Note: Runtime functions are NOT exported here to avoid circular imports.
# Import directly from utils.runtime when needed:
#   from utils.runtime import get_config_file, get_settings_file, etc.

__all__ = [
    "setup_logger",
    "get_logger",
    "get_log_file_path",
    "terminal_ui",
]
