"""SQLAlchemy implementation of UserRoleRepository."""

import logging
from collections.abc import Collection
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from userhub.domain.user import UserRoleMembership, UserRoleRepository
from userhub.infrastructure.persistence.sqlalchemy.models import UserRoleModel

logger = logging.getLogger(__name__)


class UserRoleRepositorySQLAlchemy(UserRoleRepository):
    """SQLAlchemy implementation of the UserRoleRepository interface."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def find_by_user_ids(
        self,
        user_ids: Collection[UUID],
    ) -> list[UserRoleMembership]:
        if not user_ids:
            return []

        stmt = (
            select(UserRoleModel)
            .where(UserRoleModel.user_id.in_(list(user_ids)))
            .order_by(UserRoleModel.user_id, UserRoleModel.role_name)
        )
        result = await self._session.execute(stmt)
        return [self._map_to_domain(model) for model in result.scalars().all()]

    async def find_by_user_id(self, user_id: UUID) -> list[UserRoleMembership]:
        stmt = (
            select(UserRoleModel)
            .where(UserRoleModel.user_id == user_id)
            .order_by(UserRoleModel.role_name)
        )
        result = await self._session.execute(stmt)
        return [self._map_to_domain(model) for model in result.scalars().all()]

    async def add(self, membership: UserRoleMembership) -> None:
        model = UserRoleModel(
            user_id=membership.user_id,
            role_name=membership.role_name,
            created_at=membership.created_at,
        )
        self._session.add(model)
        await self._session.flush()
        self._session.expunge(model)
        logger.info(
            "Granted role %s to user %s",
            membership.role_name,
            membership.user_id,
        )

    async def delete_by_user_id(self, user_id: UUID) -> int:
        stmt = (
            delete(UserRoleModel)
            .where(UserRoleModel.user_id == user_id)
            .execution_options(synchronize_session=False)
        )
        result = await self._session.execute(stmt)
        logger.info("Deleted %d role memberships of user %s", result.rowcount, user_id)
        return result.rowcount

    def _map_to_domain(self, model: UserRoleModel) -> UserRoleMembership:
        return UserRoleMembership(
            user_id=model.user_id,
            role_name=model.role_name,
            created_at=model.created_at,
        )
