"""Value objects for the user domain."""

from userhub.domain.user.value_objects.user_identity import UserIdentity, UserKey

__all__ = [
    "UserIdentity",
    "UserKey",
]
