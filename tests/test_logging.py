"""Logging setup tests."""
import io
import logging

import pytest

from catalog.core.logging import ROOT_LOGGER_NAME, ColoredFormatter, get_logger, setup_logging


class TtyStream(io.StringIO):
    def isatty(self):
        return True


@pytest.fixture
def catalog_logger():
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    saved_handlers, saved_level = list(logger.handlers), logger.level
    yield logger
    logger.handlers = saved_handlers
    logger.setLevel(saved_level)


def test_setup_twice_keeps_one_handler(catalog_logger):
    setup_logging("DEBUG", stream=io.StringIO())
    setup_logging("WARNING", stream=io.StringIO())

    own = [h for h in catalog_logger.handlers if isinstance(h.formatter, ColoredFormatter)]
    assert len(own) == 1
    assert catalog_logger.level == logging.WARNING


def test_plain_stream_gets_no_colour(catalog_logger):
    stream = io.StringIO()
    setup_logging("INFO", stream=stream)

    get_logger("books").info("Added book %s", 7)

    line = stream.getvalue()
    assert "\033[" not in line
    assert "| INFO     | catalog.books | Added book 7" in line


def test_terminal_stream_is_coloured(catalog_logger):
    stream = TtyStream()
    setup_logging("INFO", stream=stream)

    get_logger("books").warning("Rejected")

    assert "\033[33mWARNING " in stream.getvalue()


def test_unknown_level_falls_back_to_info(catalog_logger):
    setup_logging("CHATTY", stream=io.StringIO())
    assert catalog_logger.level == logging.INFO


def test_get_logger_names():
    assert get_logger("cache").name == "catalog.cache"
    assert get_logger("catalog.services.books").name == "catalog.services.books"
    assert get_logger(ROOT_LOGGER_NAME).name == "catalog"
