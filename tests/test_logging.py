"""
Tests for logging setup.
"""

import logging

import pytest

from rezervasyon.core.config import Settings
from rezervasyon.core.logging import service_context, setup_logging


@pytest.fixture
def restore_logging():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    engine_level = logging.getLogger("sqlalchemy.engine").level
    yield
    root.handlers = handlers
    root.setLevel(level)
    logging.getLogger("sqlalchemy.engine").setLevel(engine_level)


def test_service_context_stamps_entries():
    add_context = service_context(Settings(APP_NAME="Rezervasyon API", ENVIRONMENT="staging"))

    event = add_context(None, "info", {"event": "trip_created"})

    assert event["service"] == "Rezervasyon API"
    assert event["environment"] == "staging"
    assert event["event"] == "trip_created"


def test_service_context_keeps_explicit_values():
    add_context = service_context(Settings(ENVIRONMENT="staging"))

    assert add_context(None, "info", {"environment": "override"})["environment"] == "override"


def test_debug_lowers_levels(restore_logging):
    setup_logging(Settings(DEBUG=True, LOG_LEVEL="WARNING"))

    assert logging.getLogger().level == logging.DEBUG
    assert logging.getLogger("sqlalchemy.engine").level == logging.INFO


def test_log_level_without_debug(restore_logging):
    setup_logging(Settings(DEBUG=False, LOG_LEVEL="WARNING"))

    assert logging.getLogger().level == logging.WARNING
    assert logging.getLogger("sqlalchemy.engine").level == logging.WARNING
    assert len(logging.getLogger().handlers) == 1
