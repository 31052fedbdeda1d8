"""Pytest fixtures for API tests.

The app runs against a file-backed SQLite database in a temporary
directory; the change notifier is replaced with a mock so tests can
assert on emitted notifications.
"""

from unittest.mock import Mock

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import NullPool

from userdir.application.services import UserChangeNotifier
from userdir.infrastructure.persistence.sqlalchemy import build_engine
from userdir.presentation.api.app import API_V1_PREFIX, create_app
from userdir.presentation.api.dependencies import get_change_notifier, get_db_session
from userdir_config.settings import Settings
from tests.shared.fixtures.database import (
    make_session_maker,
    run_schema_sync,
    sqlite_file_url,
)


@pytest.fixture
def api_v1_prefix() -> str:
    """Get the API v1 prefix for building URLs."""
    return API_V1_PREFIX


@pytest.fixture
def users_url(api_v1_prefix) -> str:
    return f"{api_v1_prefix}/users"


@pytest.fixture
def api_settings(tmp_path) -> Settings:
    """Test API settings with debug enabled."""
    return Settings(
        _env_file=None,
        database_url_override=sqlite_file_url(tmp_path),
        api_host="127.0.0.1",
        api_port=8080,
        api_debug=True,
        api_cors_origins="http://localhost:3000",
        events_enabled=False,
    )


@pytest.fixture
def notifier() -> Mock:
    """Stand-in change notifier recording notify_* calls."""
    return Mock(spec=UserChangeNotifier)


@pytest.fixture
def test_client(api_settings, notifier):
    """Create a test client backed by a fresh SQLite database.

    The schema is created synchronously up front; FastAPI then opens its
    own sessions inside the TestClient's event loop.
    """
    # NullPool: every session opens its own connection in the current loop
    engine = build_engine(api_settings.database_url, poolclass=NullPool)
    run_schema_sync(engine, create=True)

    app = create_app(settings=api_settings)
    session_maker = make_session_maker(engine)

    async def override_get_db_session():
        async with session_maker() as session:
            yield session

    app.dependency_overrides[get_db_session] = override_get_db_session
    app.dependency_overrides[get_change_notifier] = lambda: notifier

    yield TestClient(app)

    run_schema_sync(engine, create=False)


@pytest.fixture
def create_user(test_client, users_url):
    """Create a user through the API and return the response body."""

    def _create(name: str, email: str, age: int | None = None) -> dict:
        response = test_client.post(
            users_url,
            json={"name": name, "email": email, "age": age},
        )
        assert response.status_code == 201, (
            f"Create failed: {response.status_code} - {response.text}"
        )
        return response.json()

    return _create
