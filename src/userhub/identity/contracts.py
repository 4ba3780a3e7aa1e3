"""Store contracts required by the identity layer.

The identity layer (registration, sign-in, authorization checks) never
talks to repositories directly. It calls one of these capability groups,
and an adapter maps each member onto the application services.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from userhub.domain.user import User


@dataclass(frozen=True)
class IdentityErrorDetail:
    """A single reason why a store operation failed."""

    code: str
    description: str


@dataclass(frozen=True)
class IdentityResult:
    """Outcome of a store command."""

    succeeded: bool
    errors: tuple[IdentityErrorDetail, ...] = ()

    @classmethod
    def success(cls) -> IdentityResult:
        return cls(succeeded=True)

    @classmethod
    def failed(cls, *errors: IdentityErrorDetail) -> IdentityResult:
        return cls(succeeded=False, errors=tuple(errors))

    def __str__(self) -> str:
        if self.succeeded:
            return "Succeeded"
        return "Failed: " + ", ".join(error.code for error in self.errors)


class UserStoreContract(ABC):
    """User lookup, naming and lifecycle."""

    @abstractmethod
    async def get_user_id(self, user: User) -> str:
        """Return the stable string identifier of a user."""

    @abstractmethod
    async def get_user_name(self, user: User) -> str | None:
        """Return the display/login name of a user."""

    @abstractmethod
    async def set_user_name(self, user: User, user_name: str) -> None:
        """Set the login name of a user."""

    @abstractmethod
    async def get_normalized_user_name(self, user: User) -> str | None:
        """Return the normalized login name of a user."""

    @abstractmethod
    async def set_normalized_user_name(self, user: User, normalized_name: str) -> None:
        """Set the normalized login name of a user."""

    @abstractmethod
    async def create(self, user: User) -> IdentityResult:
        """Create a user."""

    @abstractmethod
    async def update(self, user: User) -> IdentityResult:
        """Update a user."""

    @abstractmethod
    async def delete(self, user: User) -> IdentityResult:
        """Delete a user."""

    @abstractmethod
    async def find_by_id(self, user_id: str) -> User | None:
        """Find a user by its string-encoded identifier."""

    @abstractmethod
    async def find_by_name(self, normalized_user_name: str) -> User | None:
        """Find a user by normalized login name."""


class UserPasswordStoreContract(UserStoreContract):
    """Password hash storage."""

    @abstractmethod
    async def set_password_hash(self, user: User, password_hash: str | None) -> None:
        """Store a password hash on a user."""

    @abstractmethod
    async def get_password_hash(self, user: User) -> str | None:
        """Return the stored password hash of a user."""

    @abstractmethod
    async def has_password(self, user: User) -> bool:
        """Return whether a user has a password hash."""


class UserRoleStoreContract(UserStoreContract):
    """Role membership queries and mutations."""

    @abstractmethod
    async def add_to_role(self, user: User, role_name: str) -> None:
        """Add a user to a role."""

    @abstractmethod
    async def remove_from_role(self, user: User, role_name: str) -> None:
        """Remove a user from a role."""

    @abstractmethod
    async def get_roles(self, user: User) -> list[str]:
        """Return the role names of a user."""

    @abstractmethod
    async def is_in_role(self, user: User, role_name: str) -> bool:
        """Return whether a user holds a role."""

    @abstractmethod
    async def get_users_in_role(self, role_name: str) -> list[User]:
        """Return the users holding a role."""


class IdentityStoreContract(UserPasswordStoreContract, UserRoleStoreContract):
    """Union of all capability groups the identity layer relies on."""
