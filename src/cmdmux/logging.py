"""Logging configuration for cmdmux.

Provides optional file logging for dispatch and handler errors.
Logs are written to ~/.cmdmux/logs/cmdmux.log unless a path is given.
"""
from __future__ import annotations

import logging
import traceback
from pathlib import Path
from typing import Optional

# Directory for log files
LOGS_DIR = Path.home() / ".cmdmux" / "logs"

LOGGER_NAME = "cmdmux"

# Module-level state
_file_handler: Optional[logging.FileHandler] = None
_log_path: Optional[Path] = None
_previous_level: Optional[int] = None


def default_log_path() -> Path:
    """Get the default log file path, creating the logs directory."""
    LOGS_DIR.mkdir(parents=True, exist_ok=True)
    return LOGS_DIR / "cmdmux.log"


def configure_logging(
    log_file: Optional[Path] = None,
    level: int = logging.DEBUG,
) -> Path:
    """Attach a file handler to the cmdmux logger.

    Any handler installed by a previous call is closed first.

    Args:
        log_file: Where to write; defaults to default_log_path()
        level: Logging level for file output (default DEBUG)

    Returns:
        Path to the log file
    """
    global _file_handler, _log_path, _previous_level

    log_path = Path(log_file) if log_file else default_log_path()
    log_path.parent.mkdir(parents=True, exist_ok=True)

    close_logging()

    _file_handler = logging.FileHandler(log_path, mode="a", encoding="utf-8")
    _file_handler.setLevel(level)
    _file_handler.setFormatter(logging.Formatter(
        "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    ))

    logger = logging.getLogger(LOGGER_NAME)
    logger.addHandler(_file_handler)
    _previous_level = logger.level
    logger.setLevel(level)

    _log_path = log_path
    logger.info("=== Logging started ===")
    return log_path


def close_logging() -> None:
    """Flush and detach the file handler installed by configure_logging()."""
    global _file_handler, _log_path, _previous_level

    if _file_handler is not None:
        logger = logging.getLogger(LOGGER_NAME)
        logger.info("=== Logging stopped ===")
        logger.removeHandler(_file_handler)
        _file_handler.close()
        _file_handler = None
        _log_path = None
        logger.setLevel(_previous_level)
        _previous_level = None


def get_current_log_path() -> Optional[Path]:
    """Get the active log file path, or None if file logging is off."""
    return _log_path


def log_exception(error: Exception, context: str = "") -> str:
    """Log an exception with its traceback and return a one-line message.

    Args:
        error: The exception to log
        context: What was happening (e.g. the command name)

    Returns:
        User-friendly error message (without traceback)
    """
    logger = logging.getLogger(LOGGER_NAME)

    error_type = type(error).__name__
    if context:
        user_msg = f"{context}: {error}"
    else:
        user_msg = f"{error_type}: {error}"

    tb_str = "".join(traceback.format_exception(type(error), error, error.__traceback__))
    logger.error(f"{context}\n{error_type}: {error}\n\nTraceback:\n{tb_str}")

    return user_msg
