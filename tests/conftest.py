# tests/conftest.py
"""
pytest configuration and fixtures for the purchase indexer
"""

import logging

import pytest

from purchase_indexer.core.logging import ROOT_LOGGER_NAME, IndexerLogger
from helpers import make_network


@pytest.fixture(autouse=True)
def reset_logging():
    """Undo IndexerLogger.configure calls made by CLI invocations."""
    yield
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
    IndexerLogger._configured = False


@pytest.fixture
def network():
    return make_network("sepolia", 11155111, deployment_block=0, name="Sepolia")


@pytest.fixture
def networks():
    return [
        make_network("sepolia", 11155111, name="Sepolia"),
        make_network("ethereum-classic", 61, name="Ethereum Classic"),
        make_network("mordor", 63, name="Mordor Testnet"),
    ]
