"""User repository interface."""

from abc import ABC, abstractmethod

from userhub.domain.user.aggregates.user import User
from userhub.domain.user.value_objects import UserIdentity


class UserRepository(ABC):
    """Repository interface for User aggregates.

    Every query has a fixed, named shape (all, by id, by email) and every
    write touches exactly one user.
    """

    @abstractmethod
    async def list_all(self) -> list[User]:
        """List all users."""

    @abstractmethod
    async def find_by_id(self, identity: UserIdentity) -> User | None:
        """Find a user by the identifier of any user identity."""

    @abstractmethod
    async def find_by_email(self, email: str) -> User | None:
        """Find a user by email (case-insensitive exact match)."""

    @abstractmethod
    async def add(self, user: User) -> None:
        """Persist a new user."""

    @abstractmethod
    async def update(self, user: User) -> None:
        """Persist changes to an existing user."""

    @abstractmethod
    async def delete(self, user: User) -> None:
        """Delete a user record."""
