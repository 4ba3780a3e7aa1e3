"""Entities of the user domain."""

from userhub.domain.user.entities.user_role_membership import UserRoleMembership

__all__ = ["UserRoleMembership"]
