from userhub.domain.user.repositories.user_repository import UserRepository
from userhub.domain.user.repositories.user_role_repository import (
    UserRoleRepository,
)

__all__ = ["UserRepository", "UserRoleRepository"]
