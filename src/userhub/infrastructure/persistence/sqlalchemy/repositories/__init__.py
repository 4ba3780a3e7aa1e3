# ruff: noqa: E501 - Long import paths in __init__.py re-exports
"""SQLAlchemy repository implementations for user management."""

from userhub.infrastructure.persistence.sqlalchemy.repositories.user_repository import (
    UserRepositorySQLAlchemy,
)
from userhub.infrastructure.persistence.sqlalchemy.repositories.user_role_repository import (
    UserRoleRepositorySQLAlchemy,
)

__all__ = [
    "UserRepositorySQLAlchemy",
    "UserRoleRepositorySQLAlchemy",
]
