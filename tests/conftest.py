"""Shared pytest fixtures."""

import logging

import pytest


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop handlers the CLI entry points attach so they don't outlive captured output."""
    yield
    logger = logging.getLogger('rugbyclub')
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)
