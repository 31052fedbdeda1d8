"""User repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from userdir.domain.user.aggregates.user import User


class UserRepository(ABC):
    """Repository interface for User aggregates.

    Implementations must translate a violated email uniqueness constraint
    into ``EmailAlreadyExistsError`` and any other storage failure into
    ``PersistenceError``.
    """

    @abstractmethod
    async def save(self, user: User) -> User:
        """Persist a new user and return it with its assigned ID."""

    @abstractmethod
    async def update(self, user: User) -> User:
        """Persist changes to an existing user."""

    @abstractmethod
    async def find_by_id(self, user_id: int) -> Optional[User]:
        """Find a user by their ID."""

    @abstractmethod
    async def find_by_email(self, email: str) -> Optional[User]:
        """Find a user by their email address."""

    @abstractmethod
    async def find_all(self) -> list[User]:
        """List all users in insertion order."""

    @abstractmethod
    async def find_by_name_contains(self, fragment: str) -> list[User]:
        """Find users whose name contains ``fragment``, ignoring case."""

    @abstractmethod
    async def exists_by_id(self, user_id: int) -> bool:
        """Check if a user exists with the given ID."""

    @abstractmethod
    async def exists_by_email(self, email: str) -> bool:
        """Check if a user exists with the given email."""

    @abstractmethod
    async def exists_by_email_excluding_id(self, email: str, user_id: int) -> bool:
        """Check if a user other than ``user_id`` holds the given email."""

    @abstractmethod
    async def delete(self, user_id: int) -> User:
        """Delete a user by ID and return the removed user.

        Raises UserNotFoundError when no such user exists.
        """

    @abstractmethod
    async def count(self) -> int:
        """Count total users."""
