"""Role lookup collaborator."""

from __future__ import annotations

import logging
from collections import defaultdict
from collections.abc import Iterable
from typing import TYPE_CHECKING
from uuid import UUID

from userhub.domain.user import UserIdentity, UserRoleMembership

if TYPE_CHECKING:
    from userhub.domain.user import UserRoleRepository

logger = logging.getLogger(__name__)


class UserRoleService:
    """
    Resolves role names and role memberships for users.

    Batch lookups return memberships keyed by ``user_id`` so that any
    ``UserIdentity`` (full user, membership, bare key) can be used to pick
    a user's entries out of the result.
    """

    def __init__(self, role_repository: UserRoleRepository):
        self._role_repo = role_repository

    async def get_roles(
        self,
        identities: Iterable[UserIdentity],
    ) -> dict[UUID, list[UserRoleMembership]]:
        user_ids = {identity.user_id for identity in identities}
        memberships = await self._role_repo.find_by_user_ids(user_ids)

        roles_by_user: dict[UUID, list[UserRoleMembership]] = defaultdict(list)
        for membership in memberships:
            roles_by_user[membership.user_id].append(membership)

        return dict(roles_by_user)

    async def get_user_roles(self, identity: UserIdentity) -> list[UserRoleMembership]:
        return await self._role_repo.find_by_user_id(identity.user_id)

    async def get_role_names(self, identity: UserIdentity) -> list[str]:
        memberships = await self._role_repo.find_by_user_id(identity.user_id)
        return [membership.role_name for membership in memberships]

    async def add_role(
        self,
        identity: UserIdentity,
        role_name: str,
    ) -> UserRoleMembership:
        existing = await self._role_repo.find_by_user_id(identity.user_id)
        for membership in existing:
            if membership.role_name == role_name:
                return membership

        membership = UserRoleMembership(user_id=identity.user_id, role_name=role_name)
        await self._role_repo.add(membership)
        return membership

    async def delete_roles(self, identity: UserIdentity) -> None:
        removed = await self._role_repo.delete_by_user_id(identity.user_id)
        logger.debug("Removed %d roles for user %s", removed, identity.user_id)
