"""SQLAlchemy implementation for userhub persistence.

Provides:
- Base: Declarative base for all models
- UserModel: SQLAlchemy model for users
- UserRoleModel: SQLAlchemy model for role memberships
- UserRepositorySQLAlchemy: Repository implementation for users
- UserRoleRepositorySQLAlchemy: Repository implementation for memberships
"""

from userhub.infrastructure.persistence.sqlalchemy.models import (
    Base,
    UserModel,
    UserRoleModel,
)
from userhub.infrastructure.persistence.sqlalchemy.repositories import (
    UserRepositorySQLAlchemy,
    UserRoleRepositorySQLAlchemy,
)

__all__ = [
    "Base",
    "UserModel",
    "UserRepositorySQLAlchemy",
    "UserRoleModel",
    "UserRoleRepositorySQLAlchemy",
]
