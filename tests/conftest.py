"""
Pytest configuration and shared fixtures.

``configure_logging()`` detaches the ``solrwrap`` logger from the root
logger; the autouse fixture below restores it so ``caplog`` keeps working in
every test regardless of ordering.
"""

import logging

import pytest

from solrwrap.config import SolrConfig


@pytest.fixture(autouse=True)
def _reset_solrwrap_logger():
    yield
    logger = logging.getLogger("solrwrap")
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


@pytest.fixture
def config() -> SolrConfig:
    return SolrConfig(hostname="solr", port=8983, core="flowers")
