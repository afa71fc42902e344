"""Logging setup for scripts that use the geometry packages.

Library modules only create ``logging.getLogger(__name__)`` loggers and log at
DEBUG; handlers are attached here, by the calling application.
"""
import logging
import sys
from typing import Optional

PROJECT_LOGGERS = ("geom", "polyline", "offset", "hostio")


def setup_logging(level: int = logging.INFO, log_file: Optional[str] = None) -> None:
    """
    Configures the project loggers with a stdout handler and an optional file.

    Args:
        level: Logging level (e.g. logging.DEBUG, logging.INFO)
        log_file: Optional path to save logs to a file.
    """
    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )
    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode='w', encoding='utf-8'))
    for h in handlers:
        h.setLevel(level)
        h.setFormatter(formatter)

    for name in PROJECT_LOGGERS:
        logger = logging.getLogger(name)
        logger.setLevel(level)
        # Avoid duplicate output when called twice
        if logger.hasHandlers():
            logger.handlers.clear()
        for h in handlers:
            logger.addHandler(h)

    logging.getLogger("geom").info("Logging initialized.")
