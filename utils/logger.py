"""Logging configuration for skillsync.

Nothing is logged unless ``--verbose`` is given; then every module's records
go to one timestamped file under ~/.skillsync/logs/.
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Optional

from .runtime import get_log_dir

# Loggers that are noisy at DEBUG without saying anything about skills or git
_QUIET_LOGGERS = ("asyncio",)

_logging_initialized = False
_log_file_path = None


def setup_logger(log_dir: Optional[str] = None, log_level: Optional[str] = None) -> None:
    """Send all log records to a new file for this run.

    Called once from main() in --verbose mode; later calls are ignored.

    Args:
        log_dir: Directory to store log files (default: ~/.skillsync/logs/)
        log_level: Logging level name (default: Config.LOG_LEVEL)
    """
    global _logging_initialized, _log_file_path

    if _logging_initialized:
        return

    if log_level is None:
        from config import Config

        log_level = Config.LOG_LEVEL

    level = getattr(logging, log_level.upper(), logging.DEBUG)
    logging.root.setLevel(level)
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    log_path = Path(log_dir or get_log_dir())
    log_path.mkdir(exist_ok=True, parents=True)
    log_file = log_path / f"skillsync_{datetime.now().strftime('%Y%m%d_%H%M%S')}.log"

    handler = logging.FileHandler(log_file, encoding="utf-8")
    handler.setLevel(level)
    handler.setFormatter(
        logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s", datefmt="%Y-%m-%d %H:%M:%S"
        )
    )
    logging.root.addHandler(handler)

    _log_file_path = str(log_file)
    _logging_initialized = True
    logging.getLogger(__name__).info(f"skillsync logging at {log_level} to {_log_file_path}")


def get_logger(name: str) -> logging.Logger:
    """Get the logger for a module (``get_logger(__name__)``)."""
    return logging.getLogger(name)


def get_log_file_path() -> Optional[str]:
    """Path of this run's log file, or None when --verbose is off."""
    return _log_file_path
