"""
Global pytest configuration and fixtures.
"""
from typing import Dict

import pytest
from fastapi.testclient import TestClient

from ticktock.aggregators.reconciler import TimesheetReconciler
from ticktock.api.app import create_app
from ticktock.config import TicktockConfig, reload_config
from ticktock.data.baseline import load_baseline
from ticktock.services.additions_repository import AdditionsRepository
from ticktock.services.key_value_store import InMemoryKeyValueStore

DEMO_EMAIL = "test@example.com"
DEMO_PASSWORD = "password123"


@pytest.fixture(scope="session")
def test_env_vars() -> Dict[str, str]:
    """Test environment variables for configuration."""
    return {
        "SECRET_KEY": "test-secret-key",
        "ENVIRONMENT": "testing",
        "DEBUG": "false",
        "LOG_LEVEL": "DEBUG",
        "DEMO_USER_EMAIL": DEMO_EMAIL,
        "DEMO_USER_PASSWORD": DEMO_PASSWORD,
        "DEMO_USER_NAME": "Test User",
    }


@pytest.fixture
def mock_env(test_env_vars, monkeypatch):
    """Mock environment variables for testing."""
    for key, value in test_env_vars.items():
        monkeypatch.setenv(key, value)
    for key in ("BASELINE_FILE", "COMPLETED_HOURS_THRESHOLD", "HOST", "PORT"):
        monkeypatch.delenv(key, raising=False)

    # Clear the global config to force reload with test values
    import ticktock.config.settings

    ticktock.config.settings._config = None

    yield test_env_vars

    ticktock.config.settings._config = None


@pytest.fixture
def test_config(mock_env) -> TicktockConfig:
    """Test configuration instance."""
    return reload_config()


@pytest.fixture
def baseline():
    """Built-in baseline weeks (16, 14, 12 and 16 hours)."""
    return load_baseline()


@pytest.fixture
def memory_store() -> InMemoryKeyValueStore:
    """Empty in-memory session store."""
    return InMemoryKeyValueStore()


@pytest.fixture
def repository(memory_store) -> AdditionsRepository:
    """Additions repository over the in-memory store."""
    return AdditionsRepository(memory_store)


@pytest.fixture
def reconciler(baseline, repository) -> TimesheetReconciler:
    """Reconciler over the built-in baseline and an empty session."""
    return TimesheetReconciler(baseline, repository)


@pytest.fixture
def app(test_config, baseline):
    """ticktock web application."""
    return create_app(test_config, baseline)


@pytest.fixture
def client(app) -> TestClient:
    """HTTP client without a signed-in user."""
    return TestClient(app)


@pytest.fixture
def auth_client(client) -> TestClient:
    """HTTP client signed in as the demo user."""
    response = client.post(
        "/api/auth/login", json={"email": DEMO_EMAIL, "password": DEMO_PASSWORD}
    )
    assert response.status_code == 200
    return client


# Pytest configuration for different test types
def pytest_configure(config):
    """Configure pytest with custom markers and settings."""
    config.addinivalue_line("markers", "unit: mark test as a unit test")
    config.addinivalue_line("markers", "api: mark test as exercising the HTTP API")


def pytest_collection_modifyitems(config, items):
    """Modify test collection to add markers based on location."""
    for item in items:
        if "tests/unit/" in str(item.fspath):
            item.add_marker(pytest.mark.unit)

        if "tests/unit/api/" in str(item.fspath):
            item.add_marker(pytest.mark.api)
