"""Pytest configuration and fixtures."""

from concurrent.futures import ThreadPoolExecutor
from unittest.mock import MagicMock

import pytest

from esfuture import ElasticClient, ESConfig, SyncClient


@pytest.fixture
def es() -> MagicMock:
    """Provide a stand-in for the vendor client.

    options(request_timeout=...) returns the same mock so per-call
    responses can be configured directly on it.
    """
    mock = MagicMock(name="Elasticsearch")
    mock.options.return_value = mock
    return mock


@pytest.fixture
def executor():
    """Provide a private thread pool, shut down after the test."""
    pool = ThreadPoolExecutor(max_workers=2, thread_name_prefix="esfuture-test")
    yield pool
    pool.shutdown(wait=True)


@pytest.fixture
def client(es: MagicMock, executor: ThreadPoolExecutor) -> ElasticClient:
    """Provide an ElasticClient wrapping the mock vendor client."""
    return ElasticClient(es, timeout=5.0, executor=executor)


@pytest.fixture
def sync_client(client: ElasticClient) -> SyncClient:
    """Provide a SyncClient with a short default wait."""
    return client.sync(duration=2.0)


@pytest.fixture
def config() -> ESConfig:
    """Provide an explicit config independent of the environment."""
    return ESConfig(
        es_url="http://es.test:9200",
        es_username=None,
        es_password=None,
        verify_certs=True,
        request_timeout_s=30,
        scheme="http",
        call_timeout_s=3.0,
        sync_wait_s=7.0,
        max_workers=None,
    )
