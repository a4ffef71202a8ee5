"""
Logging configuration for RSS Archive.

Uses loguru; file logging is opt-in and rotates by size.
"""

import sys
from pathlib import Path
from typing import Optional

from loguru import logger as _logger

from rss_archive.config import get_config


def setup_logger(
    level: Optional[str] = None,
    log_file: Optional[str] = None,
    format: Optional[str] = None,
) -> None:
    """Configure the logger with console and file handlers.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, etc.)
        log_file: Path to log file; enables the file handler when given
        format: Log format string
    """
    log_config = get_config().logging

    level = level or log_config.level
    format = format or log_config.format
    file_enabled = log_config.file_enabled or log_file is not None
    log_file = log_file or log_config.file_path

    _logger.remove()

    if log_config.console_enabled:
        _logger.add(
            sys.stderr,
            format=format,
            level=level,
            colorize=True,
            backtrace=True,
            diagnose=False,
        )

    if file_enabled:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        _logger.add(
            log_file,
            format=format,
            level=level,
            rotation=log_config.rotation,
            retention=log_config.retention,
            encoding="utf-8",
            backtrace=True,
            diagnose=False,
        )


def get_logger(name: Optional[str] = None):
    """Get a logger bound to ``name`` (typically the calling module's __name__)."""
    if name:
        return _logger.bind(name=name)
    return _logger


logger = _logger

__all__ = ["setup_logger", "get_logger", "logger"]
