"""Identity store adapter backed by the user service."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING
from uuid import UUID

from userhub.domain.user import UserKey
from userhub.exceptions import UnsupportedOperationError
from userhub.identity.contracts import IdentityResult, IdentityStoreContract

if TYPE_CHECKING:
    from userhub.application.services import UserRoleService, UserService
    from userhub.domain.user import User

logger = logging.getLogger(__name__)


class UserStore(IdentityStoreContract):
    """
    Implements the user, password and role store contracts.

    Lifecycle commands report success whenever the user service did not
    raise; failures surface as exceptions. The email is the login name and
    the normalized name at the same time, so both setters overwrite it.
    """

    def __init__(self, user_service: UserService, user_role_service: UserRoleService):
        self._user_service = user_service
        self._role_service = user_role_service

    # -- user store ----------------------------------------------------------

    async def get_user_id(self, user: User) -> str:
        return str(user.id)

    async def get_user_name(self, user: User) -> str | None:
        return user.email

    async def set_user_name(self, user: User, user_name: str) -> None:
        user.change_email(user_name)

    async def get_normalized_user_name(self, user: User) -> str | None:
        return user.email

    async def set_normalized_user_name(self, user: User, normalized_name: str) -> None:
        user.change_email(normalized_name)

    async def create(self, user: User) -> IdentityResult:
        await self._user_service.add_user(user)
        return IdentityResult.success()

    async def update(self, user: User) -> IdentityResult:
        await self._user_service.update_user(user)
        return IdentityResult.success()

    async def delete(self, user: User) -> IdentityResult:
        await self._user_service.delete_user(user)
        return IdentityResult.success()

    async def find_by_id(self, user_id: str) -> User | None:
        try:
            key = UserKey(user_id=UUID(user_id))
        except (ValueError, TypeError, AttributeError):
            logger.debug("Rejected malformed user id: %r", user_id)
            return None

        return await self._user_service.get_user(key)

    async def find_by_name(self, normalized_user_name: str) -> User | None:
        return await self._user_service.get_user_by_email(normalized_user_name)

    # -- password store ------------------------------------------------------

    async def set_password_hash(self, user: User, password_hash: str | None) -> None:
        user.set_password_hash(password_hash)

    async def get_password_hash(self, user: User) -> str | None:
        return user.password_hash

    async def has_password(self, user: User) -> bool:
        raise UnsupportedOperationError("has_password")

    # -- role store ----------------------------------------------------------

    async def add_to_role(self, user: User, role_name: str) -> None:
        raise UnsupportedOperationError("add_to_role")

    async def remove_from_role(self, user: User, role_name: str) -> None:
        raise UnsupportedOperationError("remove_from_role")

    async def get_roles(self, user: User) -> list[str]:
        return await self._role_service.get_role_names(user)

    async def is_in_role(self, user: User, role_name: str) -> bool:
        raise UnsupportedOperationError("is_in_role")

    async def get_users_in_role(self, role_name: str) -> list[User]:
        raise UnsupportedOperationError("get_users_in_role")
