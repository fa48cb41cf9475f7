"""Pytest configuration and shared fixtures."""
import os

# Config refuses to import without a JWT secret
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("STORAGE_BACKEND", "memory")

import pytest

from campus_assistant.core.connectivity import ManualConnectivity
from campus_assistant.core.query_log import QueryLogStore
from campus_assistant.core.storage import InMemoryStore
from campus_assistant.engines.data_engine import MockCampusData
from campus_assistant.extensions import build_services


@pytest.fixture
def memory_store():
    """Return an empty in-memory key-value store."""
    return InMemoryStore()


@pytest.fixture
def connectivity():
    """Return a connectivity provider that starts online."""
    return ManualConnectivity(online=True)


@pytest.fixture
def services(memory_store, connectivity):
    """Return application services wired to in-memory backends."""
    return build_services(
        store=memory_store,
        connectivity=connectivity,
        source=MockCampusData(),
        query_log=QueryLogStore(limit=100),
    )


@pytest.fixture
def client(services):
    """Return a TestClient for an app whose startup has run."""
    from fastapi.testclient import TestClient

    from main import create_app

    with TestClient(create_app(services)) as test_client:
        yield test_client
