"""SQLAlchemy models for user management."""

from userhub.infrastructure.persistence.sqlalchemy.models.base import (
    Base,
    TimestampMixin,
)
from userhub.infrastructure.persistence.sqlalchemy.models.user_model import UserModel
from userhub.infrastructure.persistence.sqlalchemy.models.user_role_model import (
    UserRoleModel,
)

__all__ = [
    "Base",
    "TimestampMixin",
    "UserModel",
    "UserRoleModel",
]
