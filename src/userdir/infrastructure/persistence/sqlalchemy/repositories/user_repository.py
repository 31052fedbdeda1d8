"""SQLAlchemy implementation of UserRepository."""

import logging

from sqlalchemy import exists, func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from userdir.domain.shared.exceptions import PersistenceError
from userdir.domain.shared.time import ensure_tz_aware
from userdir.domain.user import (
    EmailAlreadyExistsError,
    User,
    UserNotFoundError,
    UserRepository,
)
from userdir.infrastructure.persistence.sqlalchemy.models import UserModel

logger = logging.getLogger(__name__)


def _is_unique_violation(error: IntegrityError) -> bool:
    message = str(error)
    return "UNIQUE constraint failed" in message or "unique" in message.lower()


class UserRepositorySQLAlchemy(UserRepository):
    """SQLAlchemy implementation of the UserRepository interface.

    Changes are flushed, never committed; the session owner decides.
    """

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def save(self, user: User) -> User:
        model = self._map_to_model(user)
        self._session.add(model)
        await self._flush(user.email)

        logger.info("Created user: %s (email: %s)", model.id, model.email)
        return self._map_to_domain(model)

    async def update(self, user: User) -> User:
        model = await self._find_model_by_id(user.id)
        if model is None:
            raise UserNotFoundError(user.id)

        self._update_model(model, user)
        await self._flush(user.email)

        logger.debug("Updated user: %s", model.id)
        return self._map_to_domain(model)

    async def find_by_id(self, user_id: int) -> User | None:
        model = await self._find_model_by_id(user_id)

        if model is None:
            return None

        return self._map_to_domain(model)

    async def find_by_email(self, email: str) -> User | None:
        stmt = select(UserModel).where(UserModel.email == email)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if model is None:
            return None

        return self._map_to_domain(model)

    async def find_all(self) -> list[User]:
        stmt = select(UserModel).order_by(UserModel.id)
        result = await self._session.execute(stmt)
        models = result.scalars().all()
        return [self._map_to_domain(model) for model in models]

    async def find_by_name_contains(self, fragment: str) -> list[User]:
        stmt = (
            select(UserModel)
            .where(UserModel.name.icontains(fragment, autoescape=True))
            .order_by(UserModel.id)
        )
        result = await self._session.execute(stmt)
        models = result.scalars().all()
        return [self._map_to_domain(model) for model in models]

    async def exists_by_id(self, user_id: int) -> bool:
        stmt = select(exists().where(UserModel.id == user_id))
        result = await self._session.execute(stmt)
        return bool(result.scalar())

    async def exists_by_email(self, email: str) -> bool:
        stmt = select(exists().where(UserModel.email == email))
        result = await self._session.execute(stmt)
        return bool(result.scalar())

    async def exists_by_email_excluding_id(self, email: str, user_id: int) -> bool:
        stmt = select(
            exists().where(UserModel.email == email, UserModel.id != user_id),
        )
        result = await self._session.execute(stmt)
        return bool(result.scalar())

    async def delete(self, user_id: int) -> User:
        # Session.delete cannot tell a missing row from a no-op, so load first
        model = await self._find_model_by_id(user_id)
        if model is None:
            raise UserNotFoundError(user_id)

        removed = self._map_to_domain(model)
        try:
            await self._session.delete(model)
            await self._session.flush()
        except SQLAlchemyError as e:
            raise PersistenceError(details={"user_id": user_id}) from e

        logger.info("Deleted user: %s", user_id)
        return removed

    async def count(self) -> int:
        stmt = select(func.count()).select_from(UserModel)
        result = await self._session.execute(stmt)
        return result.scalar_one()

    async def _flush(self, email: str) -> None:
        try:
            await self._session.flush()
        except IntegrityError as e:
            if _is_unique_violation(e):
                raise EmailAlreadyExistsError(email) from e
            raise PersistenceError(details={"email": email}) from e
        except SQLAlchemyError as e:
            raise PersistenceError(details={"email": email}) from e

    async def _find_model_by_id(self, user_id: int | None) -> UserModel | None:
        if user_id is None:
            return None
        stmt = select(UserModel).where(UserModel.id == user_id)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    def _map_to_domain(self, model: UserModel) -> User:
        return User.reconstitute(
            id=model.id,
            name=model.name,
            email=model.email,
            age=model.age,
            created_at=ensure_tz_aware(model.created_at),
        )

    def _map_to_model(self, user: User) -> UserModel:
        return UserModel(
            id=user.id,
            name=user.name,
            email=user.email,
            age=user.age,
            created_at=user.created_at,
        )

    def _update_model(self, model: UserModel, user: User) -> None:
        model.name = user.name
        model.email = user.email
        model.age = user.age
