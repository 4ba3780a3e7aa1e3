"""User role membership repository interface."""

from abc import ABC, abstractmethod
from collections.abc import Collection
from uuid import UUID

from userhub.domain.user.entities import UserRoleMembership


class UserRoleRepository(ABC):
    """Repository interface for role memberships."""

    @abstractmethod
    async def find_by_user_ids(
        self,
        user_ids: Collection[UUID],
    ) -> list[UserRoleMembership]:
        """Find the memberships of a set of users in one query."""

    @abstractmethod
    async def find_by_user_id(self, user_id: UUID) -> list[UserRoleMembership]:
        """Find the memberships of one user."""

    @abstractmethod
    async def add(self, membership: UserRoleMembership) -> None:
        """Persist a new membership."""

    @abstractmethod
    async def delete_by_user_id(self, user_id: UUID) -> int:
        """Delete all memberships of a user and return how many were removed."""
