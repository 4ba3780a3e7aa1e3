"""User service orchestrating the user repository and the role collaborator."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from userhub.application.services.user_role_service import UserRoleService
    from userhub.domain.user import User, UserIdentity, UserRepository

logger = logging.getLogger(__name__)


class UserService:
    """
    Application service assembling fully populated user aggregates.

    The service owns no state. "Not found" is an ordinary ``None`` result,
    and store failures propagate to the caller unchanged.
    """

    def __init__(
        self,
        user_repository: UserRepository,
        user_role_service: UserRoleService,
    ):
        self._user_repo = user_repository
        self._role_service = user_role_service

    async def get_users(self) -> list[User]:
        users = await self._user_repo.list_all()

        # One batched role lookup for the whole set, whatever its size.
        roles_by_user = await self._role_service.get_roles(users)

        for user in users:
            user.attach_roles(roles_by_user.get(user.user_id, []))

        return users

    async def get_user(self, identity: UserIdentity) -> User | None:
        user = await self._user_repo.find_by_id(identity)

        if user is None:
            return None

        user.attach_roles(await self._role_service.get_user_roles(user))
        return user

    async def get_user_by_email(self, email: str) -> User | None:
        user = await self._user_repo.find_by_email(email)

        if user is None:
            return None

        user.attach_roles(await self._role_service.get_user_roles(user))
        return user

    async def add_user(self, user: User) -> None:
        await self._user_repo.add(user)

    async def update_user(self, user: User) -> None:
        await self._user_repo.update(user)

    async def delete_user(self, identity: UserIdentity) -> None:
        user = await self._user_repo.find_by_id(identity)

        if user is None:
            logger.debug("Nothing to delete for user %s", identity.user_id)
            return

        # Memberships go even when deleting the user row fails
        try:
            await self._user_repo.delete(user)
        finally:
            await self._role_service.delete_roles(user)
        logger.info("Deleted user %s with its role memberships", user.id)
