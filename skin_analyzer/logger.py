"""
Logging setup shared by the API and the analyzer modules.
"""

import logging
import sys

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logger(name: str = "skin_analyzer", level: int | str = logging.INFO) -> logging.Logger:
    """
    Attach a console handler to the named logger.

    Calling it again replaces the handler instead of stacking a second one,
    so reloading the app doesn't double every line.
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)
    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))
    logger.addHandler(handler)
    return logger
