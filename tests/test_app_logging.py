"""Tests for logging configuration."""

import logging

from farm_dashboard.api.app import create_app
from farm_dashboard.app_logging import configure_logging


def test_configure_logging_idempotent() -> None:
    logger = logging.getLogger("farm_dashboard")
    logger.handlers.clear()

    configure_logging()
    first_count = len(logger.handlers)

    configure_logging()
    second_count = len(logger.handlers)

    assert first_count == 1
    assert second_count == 1
    assert logger.propagate is False


def test_configure_logging_applies_level_name() -> None:
    logger = logging.getLogger("farm_dashboard")

    configure_logging("debug")
    assert logger.level == logging.DEBUG

    configure_logging("WARNING")
    assert logger.level == logging.WARNING
    assert len(logger.handlers) == 1


def test_create_app_uses_configured_log_level(container) -> None:
    container.settings = container.settings.model_copy(update={"log_level": "ERROR"})

    create_app(container)

    assert logging.getLogger("farm_dashboard").level == logging.ERROR
