"""
Shared test fixtures and configuration.
"""

import os
import pytest

# Set test environment variables before importing app modules
os.environ.setdefault("SECRET_KEY", "test-secret-key-for-testing")
os.environ.setdefault("DEBUG", "true")
os.environ.setdefault("LOCAL_STORAGE_PATH", "/tmp/lifeclock_test_data")
os.environ.setdefault("LOG_FILE_ENABLED", "false")
os.environ.setdefault("LOG_CONSOLE_ENABLED", "false")

from fastapi.testclient import TestClient  # noqa: E402

from app.main import app, settings  # noqa: E402
from app.storage import LocalStorage, UserStorage  # noqa: E402


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def storage(tmp_path):
    return LocalStorage(str(tmp_path / "data"))


@pytest.fixture
def users(storage):
    return UserStorage(storage)


@pytest.fixture
def client(tmp_path, monkeypatch):
    """Application client with lifespan run against a fresh data directory."""
    monkeypatch.setattr(settings, "local_storage_path", str(tmp_path / "api_data"))
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def auth_headers(client):
    """Register a fresh user and return auth headers."""
    response = client.post(
        "/auth/register",
        json={"email": "alice@example.com", "password": "secret123"},
    )
    assert response.status_code == 201
    return {"Authorization": f"Bearer {response.json()['access_token']}"}

