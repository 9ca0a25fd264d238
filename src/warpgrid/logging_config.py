"""
Logging Configuration
=====================
Sets up the 'warpgrid' package logger.

Library code only creates module loggers (``logging.getLogger(__name__)``);
handlers are attached here, by the command line entry point or by a host
application that wants the grid's debug output.
"""
import logging
import sys
from typing import Optional, Union

from warpgrid.config import LOG_LEVEL

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def resolve_level(level: Union[int, str]) -> int:
    """
    Accept a numeric level or a level name such as "debug".

    Raises:
        ValueError: If the name is not a standard logging level.
    """
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.strip().upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown logging level '{level}'.")
    return resolved


def setup_logging(level: Union[int, str, None] = None, log_file: Optional[str] = None) -> logging.Logger:
    """
    Attach console (and optionally file) handlers to the 'warpgrid' logger.

    Args:
        level: Logging level or its name; defaults to ``config.LOG_LEVEL``
            (environment variable WARPGRID_LOG_LEVEL).
        log_file: Optional path to save logs to a file.

    Returns:
        The configured package logger.
    """
    numeric_level = resolve_level(LOG_LEVEL if level is None else level)
    logger = logging.getLogger("warpgrid")
    logger.setLevel(numeric_level)

    # Calling twice must not duplicate output
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT, datefmt='%H:%M:%S')
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode='w', encoding='utf-8'))

    for handler in handlers:
        handler.setLevel(numeric_level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.debug(f"Logging initialized at {logging.getLevelName(numeric_level)}.")
    return logger
