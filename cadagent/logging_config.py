"""
Logging for the 'cadagent' namespace.

Module loggers propagate to the 'cadagent' logger; the CLI calls
``setup_logging`` once, everything else only logs.
"""
import logging
import sys
from typing import Optional, Union

from . import config

LOGGER_NAME = "cadagent"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _resolve_level(level: Union[int, str, None]) -> int:
    """Level name ('debug', 'INFO') or number -> logging level. Unknown names fall back to WARNING."""
    if level is None:
        level = config.LOG_LEVEL
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(str(level).strip().upper())
    return resolved if isinstance(resolved, int) else logging.WARNING


def setup_logging(level: Union[int, str, None] = None, log_file: Optional[str] = None) -> logging.Logger:
    """
    Configures the 'cadagent' logger and returns it.

    Args:
        level: Logging level name or number; defaults to ``CADAGENT_LOG_LEVEL``.
        log_file: Optional path; plan runs are appended to it.
    """
    logger = logging.getLogger(LOGGER_NAME)
    resolved = _resolve_level(level)
    logger.setLevel(resolved)

    # calling twice must not duplicate output
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT, datefmt="%H:%M:%S")

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.debug("logging at %s", logging.getLevelName(resolved))
    return logger
