"""Pytest configuration and fixtures."""

import logging

import pytest

from inkstable import ManualFrameScheduler


@pytest.fixture
def scheduler():
    return ManualFrameScheduler()


@pytest.fixture(autouse=True)
def restore_logging():
    """Drop handlers the CLI attaches so they don't outlive captured streams."""
    logger = logging.getLogger("inkstable")
    handlers = list(logger.handlers)
    level = logger.level
    yield
    for handler in logger.handlers:
        if handler not in handlers:
            logger.removeHandler(handler)
            handler.close()
    logger.setLevel(level)


@pytest.fixture
def test_settings():
    """Override service settings for testing."""
    from inkstable.api.settings import settings

    original_api_keys = settings.api_keys
    original_max_samples = settings.max_samples

    settings.api_keys = ""
    settings.max_samples = 500

    yield settings

    settings.api_keys = original_api_keys
    settings.max_samples = original_max_samples


@pytest.fixture
def client(test_settings):
    from fastapi.testclient import TestClient

    from inkstable.api.main import app

    return TestClient(app)
