"""Testcontainers PostgreSQL fixtures for persistence integration tests."""

import pytest

from userdir.infrastructure.persistence.sqlalchemy import UserRepositorySQLAlchemy
from tests.shared.fixtures.database import (
    postgres_container,
    postgres_session,
    postgres_url,
)

# Make fixtures available to tests in this directory
__all__ = ["postgres_container", "postgres_session", "postgres_url"]


@pytest.fixture
def pg_user_repo(postgres_session):
    """Create UserRepository instance bound to the PostgreSQL session."""
    return UserRepositorySQLAlchemy(postgres_session)
