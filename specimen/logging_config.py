"""Logging setup for the meetup CLI.

Every module logs through a child of the 'specimen' logger. The CLI calls
setup_logging() once; library use without it falls back to logging's defaults.
"""

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

from .config import get_config

ROOT_LOGGER = 'specimen'

FILE_FORMAT = logging.Formatter(
    '%(asctime)s %(levelname)-7s %(name)s:%(lineno)d  %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S',
)
CONSOLE_FORMAT = logging.Formatter('%(levelname)s: %(message)s')


def log_file_path(log_dir: Path) -> Path:
    """One file per CLI run, named after the moment it started."""
    return log_dir / f'meetup_{datetime.now():%Y%m%d_%H%M%S}.log'


def setup_logging(
    log_dir: Optional[Path] = None,
    verbose: bool = False,
    log_to_file: bool = True,
    log_to_console: bool = True,
) -> logging.Logger:
    """
    Configure the 'specimen' logger for a CLI run.

    Args:
        log_dir: Directory for the run's log file (default: config.log_dir)
        verbose: Log at DEBUG instead of INFO
        log_to_file: Write a per-run log file
        log_to_console: Echo log lines to stderr

    Returns:
        The configured 'specimen' logger
    """
    level = logging.DEBUG if verbose else logging.INFO
    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(level)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    if log_to_file:
        log_dir = Path(log_dir if log_dir is not None else get_config().log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file_path(log_dir), encoding='utf-8')
        file_handler.setFormatter(FILE_FORMAT)
        logger.addHandler(file_handler)

    # stdout carries command output
    if log_to_console:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(CONSOLE_FORMAT)
        logger.addHandler(console_handler)

    return logger


def get_logger(name: str = ROOT_LOGGER) -> logging.Logger:
    return logging.getLogger(name)
