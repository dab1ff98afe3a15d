"""Fixtures for API tests."""

import pytest
from fastapi.testclient import TestClient

from wvruns.api.app import create_app
from wvruns.api.dependencies import get_store
from wvruns.store import MemoryStore


@pytest.fixture
def client(store: MemoryStore) -> TestClient:
    """Provide a test client whose routes all share the test's in-memory store."""
    app = create_app()
    app.dependency_overrides[get_store] = lambda: store
    return TestClient(app)
