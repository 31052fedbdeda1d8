"""SQLAlchemy models for persistence layer."""

from userdir.infrastructure.persistence.sqlalchemy.models.base import Base
from userdir.infrastructure.persistence.sqlalchemy.models.user_model import UserModel

__all__ = [
    "Base",
    "UserModel",
]
