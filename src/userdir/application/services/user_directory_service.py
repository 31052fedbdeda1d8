"""User directory service: validated CRUD over the user store."""

from __future__ import annotations

from typing import TYPE_CHECKING

from userdir.domain.user import (
    EmailAlreadyExistsError,
    InvalidUserDataError,
    User,
    UserNotFoundError,
    validate_user_data,
)

if TYPE_CHECKING:
    from userdir.application.services.user_change_notifier import UserChangeNotifier
    from userdir.domain.user import UserRepository


class UserDirectoryService:
    """
    Application service for managing user records.

    Orchestrates field validation, email uniqueness and the repository.
    Create and delete emit a best-effort change notification; update does
    not. The repository's own unique constraint backs up the uniqueness
    pre-checks when two requests race for the same email.

    The service never commits; the caller owns the transaction.
    """

    def __init__(
        self,
        user_repository: UserRepository,
        notifier: UserChangeNotifier,
    ):
        self._user_repo = user_repository
        self._notifier = notifier

    async def create(self, name: str, email: str, age: int | None = None) -> User:
        validate_user_data(name, email, age)

        email = email.strip()
        if await self._user_repo.exists_by_email(email):
            raise EmailAlreadyExistsError(email)

        user = await self._user_repo.save(User.create(name, email, age))

        self._notifier.notify_created(user.id, user.email, user.name)
        return user

    async def get_by_id(self, user_id: int) -> User:
        user = await self._user_repo.find_by_id(user_id)
        if user is None:
            raise UserNotFoundError(user_id)
        return user

    async def get_by_email(self, email: str) -> User:
        user = await self._user_repo.find_by_email(email)
        if user is None:
            raise UserNotFoundError(email, by="email")
        return user

    async def list_all(self) -> list[User]:
        return await self._user_repo.find_all()

    async def search_by_name(self, fragment: str | None) -> list[User]:
        """Case-insensitive substring search; an empty fragment matches all."""
        if fragment is None:
            raise InvalidUserDataError.for_field(
                "name",
                "Search parameter 'name' is required",
            )
        return await self._user_repo.find_by_name_contains(fragment)

    async def update(
        self,
        user_id: int,
        name: str,
        email: str,
        age: int | None = None,
    ) -> User:
        user = await self._user_repo.find_by_id(user_id)
        if user is None:
            raise UserNotFoundError(user_id)

        validate_user_data(name, email, age)

        email = email.strip()
        if await self._user_repo.exists_by_email_excluding_id(email, user_id):
            raise EmailAlreadyExistsError(email)

        user.change_details(name, email, age)
        return await self._user_repo.update(user)

    async def delete(self, user_id: int) -> None:
        if not await self._user_repo.exists_by_id(user_id):
            raise UserNotFoundError(user_id)

        removed = await self._user_repo.delete(user_id)

        self._notifier.notify_deleted(removed.id, removed.email, removed.name)

    async def exists(self, user_id: int) -> bool:
        return await self._user_repo.exists_by_id(user_id)

    async def count(self) -> int:
        return await self._user_repo.count()
