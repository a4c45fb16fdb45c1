"""
Logging setup shared by the CLI and library modules.

Library modules obtain loggers with get_logger(__name__) and never configure
handlers themselves; entry points call setup_logging() once.
"""

import logging
import sys
from pathlib import Path
from typing import Optional, Union

from sheet_insights.core.constants import LOG_FORMAT, LOG_DATE_FORMAT

ROOT_LOGGER_NAME = "sheet_insights"


def setup_logging(level: Union[str, int] = "WARNING", log_file: Optional[str] = None) -> logging.Logger:
    """
    Configure the package logger.

    Args:
        level: Logging level name or number
        log_file: Optional path for an additional file handler

    Returns:
        The configured package logger
    """
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.WARNING)

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(level)

    # Re-running setup (e.g. repeated CLI invocations in one process) must not stack handlers
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


def get_logger(name: str) -> logging.Logger:
    """Return a module logger."""
    return logging.getLogger(name)
