"""SQLAlchemy implementation of the user store.

Provides:
- Base: Declarative base for all models
- UserModel: SQLAlchemy model for users
- UserRepositorySQLAlchemy: Repository implementation for users
- build_engine: Async engine factory (adds Unicode lower() on SQLite)
"""

from userdir.infrastructure.persistence.sqlalchemy.engine import build_engine
from userdir.infrastructure.persistence.sqlalchemy.models import Base, UserModel
from userdir.infrastructure.persistence.sqlalchemy.repositories import (
    UserRepositorySQLAlchemy,
)

__all__ = [
    "Base",
    "UserModel",
    "UserRepositorySQLAlchemy",
    "build_engine",
]
