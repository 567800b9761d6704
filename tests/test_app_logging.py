"""Tests for logging configuration."""

import logging

from photo_diary.app_logging import LOGGER_NAME, configure_logging


def test_configure_logging_adds_single_handler() -> None:
    logger = logging.getLogger(LOGGER_NAME)
    logger.handlers.clear()

    configure_logging()
    configure_logging()

    assert len(logger.handlers) == 1
    assert logger.propagate is False


def test_configure_logging_updates_level_on_repeat_calls() -> None:
    logger = logging.getLogger(LOGGER_NAME)
    logger.handlers.clear()

    configure_logging("info")
    assert logger.level == logging.INFO

    configure_logging("debug")
    assert logger.level == logging.DEBUG
    assert len(logger.handlers) == 1

    configure_logging()
