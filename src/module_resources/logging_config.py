"""Logging configuration for module-resources.

Library modules only call get_logger(). Nothing is written anywhere until
the host application calls setup_logging(), which attaches a file handler
(and a console handler in debug mode) to the "module_resources" logger.
"""

import logging
import sys
from pathlib import Path
from typing import Optional

PACKAGE_LOGGER = "module_resources"

FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
CONSOLE_FORMAT = "%(levelname)s - %(name)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _detach_handlers(logger: logging.Logger) -> None:
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


def setup_logging(debug: bool = False, log_file: Optional[Path] = None) -> logging.Logger:
    """Attach handlers for bundle resolution and loader diagnostics.

    Calling it again replaces the handlers from the previous call.

    Args:
        debug: Also echo records to stdout
        log_file: Log file location, BundlePaths.LOG_FILE when omitted

    Returns:
        The package logger
    """
    from .config.paths import BundlePaths

    log_path = Path(log_file) if log_file else BundlePaths.LOG_FILE
    log_path.parent.mkdir(parents=True, exist_ok=True)

    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(logging.DEBUG)
    _detach_handlers(logger)

    file_handler = logging.FileHandler(log_path, encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt=DATE_FORMAT))
    logger.addHandler(file_handler)

    if debug:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(logging.DEBUG)
        console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
        logger.addHandler(console_handler)

    logger.debug("Logging to %s (debug=%s)", log_path, debug)
    return logger


def get_logger(name: str) -> logging.Logger:
    """Get the child logger of a package module, e.g. get_logger("bundle_cache")."""
    return logging.getLogger(f"{PACKAGE_LOGGER}.{name}")
