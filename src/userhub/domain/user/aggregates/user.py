"""User aggregate."""

from collections.abc import Iterable
from datetime import datetime
from uuid import UUID, uuid4

from userhub.domain.shared.time import utc_now
from userhub.domain.user.entities import UserRoleMembership

ADMIN_ROLE = "admin"


class User:
    """
    User aggregate root.

    The email doubles as the login name and as the normalized user name.
    Role memberships are not persisted with the user; they are attached by
    the user service after a lookup and are transient.
    """

    def __init__(  # noqa: PLR0913
        self,
        email: str,
        first_name: str | None = None,
        last_name: str | None = None,
        password_hash: str | None = None,
        id: UUID | None = None,
        roles: Iterable[UserRoleMembership] | None = None,
        created_at: datetime | None = None,
        updated_at: datetime | None = None,
    ):
        self._email = email
        self._id = id or uuid4()
        self._first_name = first_name
        self._last_name = last_name
        self._password_hash = password_hash
        self._roles = list(roles) if roles is not None else []
        self._created_at = created_at or utc_now()
        self._updated_at = updated_at or utc_now()

    @property
    def id(self) -> UUID:
        return self._id

    @property
    def user_id(self) -> UUID:
        return self._id

    @property
    def email(self) -> str:
        return self._email

    @property
    def first_name(self) -> str | None:
        return self._first_name

    @property
    def last_name(self) -> str | None:
        return self._last_name

    @property
    def name(self) -> str:
        return " ".join(part for part in (self._first_name, self._last_name) if part)

    @property
    def password_hash(self) -> str | None:
        return self._password_hash

    @property
    def roles(self) -> list[UserRoleMembership]:
        return self._roles

    @property
    def role_names(self) -> list[str]:
        return [membership.role_name for membership in self._roles]

    @property
    def is_admin(self) -> bool:
        return self.has_role(ADMIN_ROLE)

    @property
    def created_at(self) -> datetime:
        return self._created_at

    @property
    def updated_at(self) -> datetime:
        return self._updated_at

    def has_role(self, role_name: str) -> bool:
        return role_name in self.role_names

    def change_email(self, email: str) -> None:
        # Stored verbatim: callers decide on normalization.
        self._email = email
        self._updated_at = utc_now()

    def rename(self, first_name: str | None, last_name: str | None) -> None:
        self._first_name = first_name
        self._last_name = last_name
        self._updated_at = utc_now()

    def set_password_hash(self, password_hash: str | None) -> None:
        self._password_hash = password_hash
        self._updated_at = utc_now()

    def attach_roles(self, roles: Iterable[UserRoleMembership]) -> None:
        self._roles = list(roles)

    @classmethod
    def create(
        cls,
        email: str,
        first_name: str | None = None,
        last_name: str | None = None,
    ) -> "User":
        return cls(email=email, first_name=first_name, last_name=last_name)

    @classmethod
    def reconstitute(  # noqa: PLR0913
        cls,
        id: UUID,
        email: str,
        first_name: str | None,
        last_name: str | None,
        password_hash: str | None,
        created_at: datetime,
        updated_at: datetime,
    ) -> "User":
        return cls(
            id=id,
            email=email,
            first_name=first_name,
            last_name=last_name,
            password_hash=password_hash,
            created_at=created_at,
            updated_at=updated_at,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, User):
            return NotImplemented
        return self._id == other._id

    def __hash__(self) -> int:
        return hash(self._id)

    def __repr__(self) -> str:
        return f"User(id={self._id}, email={self._email})"
