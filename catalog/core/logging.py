"""Logging configuration for the catalog."""
import logging
import sys
from typing import Optional, TextIO

ROOT_LOGGER_NAME = "catalog"

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
DATE_FORMAT = "%H:%M:%S"

LEVEL_COLORS = {
    logging.DEBUG: "\033[36m",
    logging.INFO: "\033[32m",
    logging.WARNING: "\033[33m",
    logging.ERROR: "\033[31m",
    logging.CRITICAL: "\033[35m",
}
NAME_COLOR = "\033[34m"
RESET = "\033[0m"


class ColoredFormatter(logging.Formatter):
    """Pads the level column and, when ``use_color`` is set, colours it.

    Formats a copy of the record so other handlers still see the plain
    level and logger names.
    """

    def __init__(self, fmt: str = LOG_FORMAT, datefmt: str = DATE_FORMAT, use_color: bool = True):
        super().__init__(fmt, datefmt=datefmt)
        self.use_color = use_color

    def format(self, record):
        record = logging.makeLogRecord(record.__dict__)
        level = f"{record.levelname:<8}"
        if self.use_color:
            color = LEVEL_COLORS.get(record.levelno, "")
            record.levelname = f"{color}{level}{RESET}"
            record.name = f"{NAME_COLOR}{record.name}{RESET}"
        else:
            record.levelname = level
        return super().format(record)


class _CatalogHandler(logging.StreamHandler):
    """Console handler installed by ``setup_logging``; replaced on re-setup."""


def setup_logging(level: str = "INFO", stream: Optional[TextIO] = None) -> logging.Logger:
    """Attach one console handler to the ``catalog`` logger.

    Calling it again swaps the handler instead of stacking another one.
    Colours are used only when the stream is a terminal. Unknown level names
    fall back to INFO.
    """
    stream = stream or sys.stderr
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(getattr(logging, str(level).upper(), logging.INFO))

    for handler in [h for h in logger.handlers if isinstance(h, _CatalogHandler)]:
        logger.removeHandler(handler)

    handler = _CatalogHandler(stream)
    isatty = getattr(stream, "isatty", None)
    handler.setFormatter(ColoredFormatter(use_color=bool(isatty and isatty())))
    logger.addHandler(handler)

    return logger


def get_logger(name: str) -> logging.Logger:
    """Child of the ``catalog`` logger; ``__name__`` style names are accepted."""
    if name == ROOT_LOGGER_NAME or name.startswith(f"{ROOT_LOGGER_NAME}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")
