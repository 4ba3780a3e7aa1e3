"""Application services."""

from userhub.application.services.authentication_service import (
    AuthenticationService,
)
from userhub.application.services.user_role_service import UserRoleService
from userhub.application.services.user_service import UserService

__all__ = [
    "AuthenticationService",
    "UserRoleService",
    "UserService",
]
