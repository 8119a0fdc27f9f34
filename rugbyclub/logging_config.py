"""Logging setup for the schedule import and performance report scripts.

Every module logs through a child of the ``rugbyclub`` logger. The logger
itself passes everything down to DEBUG and the handlers decide what is kept:

    console   ``level`` (INFO by default, DEBUG with --verbose)
    log file  always DEBUG, so skipped schedule lines and rejected rows
              are on record even when the console is quiet
"""

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

LOGGER_NAME = 'rugbyclub'

FILE_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s'
FILE_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'
CONSOLE_FORMAT = '%(levelname)s: %(message)s'


def log_file_path(log_dir: Path | str, started: Optional[datetime] = None) -> Path:
    """Timestamped log file for one script run, e.g. logs/rugbyclub_20241215_180000.log."""
    started = started or datetime.now()
    return Path(log_dir) / f'{LOGGER_NAME}_{started:%Y%m%d_%H%M%S}.log'


def _close_handlers(logger: logging.Logger) -> None:
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


def setup_logging(
    log_dir: Optional[Path | str] = None,
    level: int = logging.INFO,
    log_to_file: bool = True,
    log_to_console: bool = True,
) -> logging.Logger:
    """
    Configure the ``rugbyclub`` logger for a script run.

    Calling it again replaces the handlers of the previous call.

    Args:
        log_dir: Directory for the log file (default: ./logs)
        level: Console level (default: INFO); the file always records DEBUG
        log_to_file: Write a timestamped log file
        log_to_console: Echo records to stdout

    Returns:
        The configured ``rugbyclub`` logger

    Example:
        logger = setup_logging(log_dir=get_log_dir(), level=logging.DEBUG)
        logger.info("Importing training schedule")
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG)
    _close_handlers(logger)

    if log_to_console:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(level)
        console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
        logger.addHandler(console_handler)

    if log_to_file:
        log_file = log_file_path(log_dir if log_dir is not None else 'logs')
        log_file.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_file, encoding='utf-8')
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt=FILE_DATE_FORMAT))
        logger.addHandler(file_handler)
        logger.debug(f'Writing log file {log_file}')

    return logger
