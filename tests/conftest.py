"""Shared fixtures"""

import logging

import pytest
import structlog


@pytest.fixture
def clean_logging():
    """Undo setup_logging() so file handlers do not leak between tests"""
    yield
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
        handler.close()
    structlog.reset_defaults()
