"""Shared fixtures for runtime-js-scan tests."""

import logging

import pytest

from runtime_js_scan.constants import SCAN_EVENTS_LOGGER
from runtime_js_scan.parsing.ast_engine import ASTEngine


@pytest.fixture
def engine():
    """Create a shared ASTEngine instance."""
    return ASTEngine()


@pytest.fixture(autouse=True)
def reset_scan_event_logger():
    """Undo configure_scan_logging between tests."""
    yield
    events = logging.getLogger(SCAN_EVENTS_LOGGER)
    for handler in list(events.handlers):
        events.removeHandler(handler)
        handler.close()
    events.propagate = True
    events.setLevel(logging.NOTSET)
