"""User domain - manages user records and role memberships.

This domain handles:
- User aggregate (identity, email/login name, password hash, names)
- Role memberships as (user, role) pairs
- The UserIdentity capability used as a lookup key

Design notes:
- User ID is a random UUID4 generated at creation
- Email is mutable and doubles as the normalized user name
- Repository interfaces are defined here, implementations in infrastructure
"""

from userhub.domain.user.aggregates import ADMIN_ROLE, User
from userhub.domain.user.entities import UserRoleMembership
from userhub.domain.user.exceptions import (
    CannotDeleteSelfError,
    EmailAlreadyExistsError,
    UserNotFoundError,
)
from userhub.domain.user.repositories import UserRepository, UserRoleRepository
from userhub.domain.user.value_objects import UserIdentity, UserKey

__all__ = [
    "ADMIN_ROLE",
    "CannotDeleteSelfError",
    "EmailAlreadyExistsError",
    "User",
    "UserIdentity",
    "UserKey",
    "UserNotFoundError",
    "UserRepository",
    "UserRoleMembership",
    "UserRoleRepository",
]
