"""
Pytest fixtures for persistence unit tests.

Each test gets a fresh in-memory SQLite database.
"""

import pytest

from userdir.infrastructure.persistence.sqlalchemy import UserRepositorySQLAlchemy
from tests.shared.fixtures.database import async_engine, async_session

# Make fixtures available
__all__ = ["async_engine", "async_session"]


@pytest.fixture
def user_repo(async_session):
    """Create UserRepository instance with the test session."""
    return UserRepositorySQLAlchemy(async_session)
