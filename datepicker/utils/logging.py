"""Logging configuration and setup utilities."""

import logging
import logging.handlers
from pathlib import Path
from typing import Optional, Union

LOGGER_NAME = "datepicker"

CONSOLE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s"


def get_log_level(level_name: str) -> int:
    """Get numeric log level from string name.

    Args:
        level_name: Log level name (DEBUG, INFO, WARNING, ERROR, CRITICAL), any case

    Returns:
        Numeric log level value for use with logging methods

    Raises:
        ValueError: If level name is not recognized

    Example:
        >>> get_log_level("debug")
        10
    """
    level = logging.getLevelName(level_name.upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {level_name}")
    return level


def setup_logging(
    log_level: str = "INFO",
    log_file: Optional[str] = None,
    log_dir: Optional[Union[str, Path]] = None,
) -> logging.Logger:
    """Set up picker logging with console and optional file output.

    The library itself only creates module loggers under ``datepicker``; hosts
    that want its diagnostics call this once at startup. Calling it again
    replaces the handlers installed by the previous call.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL);
            unknown names fall back to INFO
        log_file: Optional log file name
        log_dir: Optional log directory path, created if missing

    Returns:
        The configured ``datepicker`` logger
    """
    try:
        numeric_level = get_log_level(log_level)
    except ValueError:
        numeric_level = logging.INFO

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(numeric_level)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console_handler = logging.StreamHandler()
    console_handler.setLevel(numeric_level)
    console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT, datefmt="%H:%M:%S"))
    logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file)
        if log_dir:
            log_dir = Path(log_dir)
            log_dir.mkdir(parents=True, exist_ok=True)
            log_path = log_dir / log_file

        file_handler = logging.handlers.RotatingFileHandler(
            log_path, maxBytes=1024 * 1024, backupCount=3, encoding="utf-8"
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        logger.addHandler(file_handler)

        logger.info(f"Logging to file: {log_path}")

    logger.debug(f"Logging initialized at {logging.getLevelName(numeric_level)} level")
    return logger
