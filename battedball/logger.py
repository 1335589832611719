"""Logging for the battedball library.

One pre-configured logger is shared by every module. Console output is on
by default at INFO; file logging at DEBUG can be switched on for a run:

    from battedball.logger import enable_file_logging, disable_file_logging

    enable_file_logging("flight_debug.log")
    ...
    disable_file_logging()
"""
import logging
from typing import Optional

__all__ = ('logger',
           'enable_file_logging',
           'disable_file_logging',
)

formatter = logging.Formatter("%(levelname)s:%(name)s:%(message)s")
console_handler = logging.StreamHandler()
console_handler.setFormatter(formatter)
console_handler.setLevel(logging.DEBUG)

logger: logging.Logger = logging.getLogger('battedball')
logger.addHandler(console_handler)
logger.setLevel(logging.INFO)

file_handler: Optional[logging.FileHandler] = None


def enable_file_logging(filename: str = "battedball.log") -> None:
    """Log everything from DEBUG up to ``filename`` (appending).

    Replaces any file handler enabled earlier and lowers the logger level
    to DEBUG so the per-flight detail reaches the file.
    """
    global file_handler
    if file_handler is not None:
        disable_file_logging()

    file_handler = logging.FileHandler(filename)
    file_handler.setLevel(logging.DEBUG)
    file_formatter = logging.Formatter("%(asctime)s:%(levelname)s:%(message)s")
    file_handler.setFormatter(file_formatter)
    logger.addHandler(file_handler)
    logger.setLevel(logging.DEBUG)


def disable_file_logging() -> None:
    """Remove and close the file handler; safe to call when none is active."""
    global file_handler
    if file_handler is not None:
        logger.removeHandler(file_handler)
        file_handler.close()
        file_handler = None
        logger.setLevel(logging.INFO)
