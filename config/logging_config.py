"""
Centralized logging configuration for PageFlow.

Every module obtains its logger here so that console and rotating-file
output share one format. Level and file location can be overridden with
the PAGEFLOW_LOG_LEVEL / PAGEFLOW_LOG_FILE environment variables.
"""
import logging
import logging.handlers
import os
from pathlib import Path
from .constants import (
    LOG_LEVEL, LOG_FORMAT, LOG_FILE,
    LOG_MAX_SIZE_MB, LOG_BACKUP_COUNT
)

ROOT_LOGGER_NAME = 'pageflow'


def _console_handler(formatter: logging.Formatter) -> logging.Handler:
    handler = logging.StreamHandler()
    handler.setLevel(logging.INFO)
    handler.setFormatter(formatter)
    return handler


def _file_handler(formatter: logging.Formatter) -> logging.Handler:
    """DEBUG and up, rotated by size"""
    log_path = Path(os.environ.get('PAGEFLOW_LOG_FILE', LOG_FILE))
    log_path.parent.mkdir(parents=True, exist_ok=True)

    handler = logging.handlers.RotatingFileHandler(
        log_path,
        maxBytes=LOG_MAX_SIZE_MB * 1024 * 1024,
        backupCount=LOG_BACKUP_COUNT,
        encoding='utf-8',
    )
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(formatter)
    return handler


def setup_logger(name: str = None) -> logging.Logger:
    """
    Get or create a configured logger.

    Usage:
        from config.logging_config import setup_logger
        logger = setup_logger(__name__)
        logger.info("Rendering 3 page(s)")

    Args:
        name: Logger name. If None, uses 'pageflow'.

    Returns:
        Configured logging.Logger instance.
    """
    logger = logging.getLogger(name or ROOT_LOGGER_NAME)

    # Handlers are attached once per logger name
    if logger.handlers:
        return logger

    level_name = os.environ.get('PAGEFLOW_LOG_LEVEL', LOG_LEVEL).upper()
    logger.setLevel(getattr(logging, level_name, logging.INFO))
    logger.propagate = False

    formatter = logging.Formatter(LOG_FORMAT)
    logger.addHandler(_console_handler(formatter))
    logger.addHandler(_file_handler(formatter))
    return logger


def get_logger(name: str = None) -> logging.Logger:
    """
    Alias for setup_logger for convenience.

    Usage:
        from config.logging_config import get_logger
        logger = get_logger(__name__)
    """
    return setup_logger(name)


# Package-level logger for quick imports
logger = setup_logger(ROOT_LOGGER_NAME)
