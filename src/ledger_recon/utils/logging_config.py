"""Logging setup for the ledger_recon command-line tool."""

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional, Union

APP_LOGGER = "ledger_recon"
DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(filename)s:%(lineno)d - %(message)s"


def resolve_level(level: Union[int, str]) -> int:
    """Turn a level name such as "debug" into its number; unknown names give INFO."""
    if isinstance(level, int):
        return level
    value = logging.getLevelName(level.strip().upper())
    return value if isinstance(value, int) else logging.INFO


def setup_logging(
    level: Union[int, str] = logging.INFO,
    log_file: Optional[Path] = None,
    log_format: Optional[str] = None,
    max_bytes: int = 5 * 1024 * 1024,
    backup_count: int = 3,
) -> logging.Logger:
    """
    Route the package's log records to the console and, optionally, a file.

    Calling this again replaces the handlers of the previous call.

    Args:
        level: Console level, as a number or a level name
        log_file: Rotating log file that receives DEBUG and above
        log_format: Console format; DEFAULT_FORMAT when omitted
        max_bytes: Size at which the log file rotates
        backup_count: Rotated files kept

    Returns:
        The package logger
    """
    console_level = resolve_level(level)
    app_logger = logging.getLogger(APP_LOGGER)

    for handler in list(app_logger.handlers):
        app_logger.removeHandler(handler)
        handler.close()

    console = logging.StreamHandler()
    console.setLevel(console_level)
    console.setFormatter(logging.Formatter(log_format or DEFAULT_FORMAT))
    app_logger.addHandler(console)

    app_level = console_level
    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_file, maxBytes=max_bytes, backupCount=backup_count
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT))
        app_logger.addHandler(file_handler)
        app_level = logging.DEBUG

    # The file may want more detail than the console shows
    app_logger.setLevel(app_level)
    return app_logger
