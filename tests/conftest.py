"""
Pytest fixtures for the catalog API. Every test gets a fresh seeded store
and an app wired to it, so tests never see each other's writes.
"""

import pytest
from fastapi.testclient import TestClient

from catalog.config import Settings
from catalog.database import ProductStore
from catalog.main import create_app

TEST_API_KEY = "test-secret-key"


@pytest.fixture
def store():
    return ProductStore()


@pytest.fixture
def app(store):
    return create_app(Settings(api_key=TEST_API_KEY), store=store)


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def auth():
    return {"x-api-key": TEST_API_KEY}
