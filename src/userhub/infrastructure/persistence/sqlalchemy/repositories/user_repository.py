"""SQLAlchemy implementation of UserRepository."""

import logging

from sqlalchemy import delete, func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from userhub.domain.user import (
    EmailAlreadyExistsError,
    User,
    UserIdentity,
    UserNotFoundError,
    UserRepository,
)
from userhub.infrastructure.persistence.sqlalchemy.models import UserModel

logger = logging.getLogger(__name__)


class UserRepositorySQLAlchemy(UserRepository):
    """SQLAlchemy implementation of the UserRepository interface.

    Rows are never left attached to the session: reads expunge the loaded
    model after mapping it, and writes go through single statements (or a
    single flush for inserts) whose model is expunged afterwards.
    """

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def list_all(self) -> list[User]:
        stmt = select(UserModel).order_by(UserModel.created_at)
        result = await self._session.execute(stmt)
        models = result.scalars().all()
        return [self._detach_to_domain(model) for model in models]

    async def find_by_id(self, identity: UserIdentity) -> User | None:
        stmt = select(UserModel).where(UserModel.id == identity.user_id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if model is None:
            return None

        return self._detach_to_domain(model)

    async def find_by_email(self, email: str) -> User | None:
        stmt = (
            select(UserModel)
            .where(func.lower(UserModel.email) == email.lower())
            .order_by(UserModel.created_at)
            .limit(1)
        )
        result = await self._session.execute(stmt)
        model = result.scalars().first()

        if model is None:
            return None

        return self._detach_to_domain(model)

    async def add(self, user: User) -> None:
        model = self._map_to_model(user)
        self._session.add(model)

        try:
            await self._session.flush()
        except IntegrityError as e:
            if self._is_unique_violation(e):
                raise EmailAlreadyExistsError(user.email) from e
            raise

        self._session.expunge(model)
        logger.info("Created user: %s (email: %s)", user.id, user.email)

    async def update(self, user: User) -> None:
        stmt = (
            update(UserModel)
            .where(UserModel.id == user.id)
            .values(
                email=user.email,
                password_hash=user.password_hash,
                first_name=user.first_name,
                last_name=user.last_name,
                updated_at=user.updated_at,
            )
            .execution_options(synchronize_session=False)
        )

        try:
            result = await self._session.execute(stmt)
        except IntegrityError as e:
            if self._is_unique_violation(e):
                raise EmailAlreadyExistsError(user.email) from e
            raise

        if result.rowcount == 0:
            raise UserNotFoundError(str(user.id))

        logger.debug("Updated user: %s", user.id)

    async def delete(self, user: User) -> None:
        stmt = (
            delete(UserModel)
            .where(UserModel.id == user.id)
            .execution_options(synchronize_session=False)
        )
        result = await self._session.execute(stmt)

        if result.rowcount == 0:
            raise UserNotFoundError(str(user.id))

        logger.info("Deleted user: %s", user.id)

    def _detach_to_domain(self, model: UserModel) -> User:
        user = self._map_to_domain(model)
        self._session.expunge(model)
        return user

    def _map_to_domain(self, model: UserModel) -> User:
        return User.reconstitute(
            id=model.id,
            email=model.email,
            first_name=model.first_name,
            last_name=model.last_name,
            password_hash=model.password_hash,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def _map_to_model(self, user: User) -> UserModel:
        return UserModel(
            id=user.id,
            email=user.email,
            password_hash=user.password_hash,
            first_name=user.first_name,
            last_name=user.last_name,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )

    @staticmethod
    def _is_unique_violation(error: IntegrityError) -> bool:
        # SQLite: "UNIQUE constraint failed", PostgreSQL: "violates unique constraint"
        return "unique" in str(error.orig).lower()
