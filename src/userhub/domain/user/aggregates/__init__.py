from userhub.domain.user.aggregates.user import ADMIN_ROLE, User

__all__ = ["ADMIN_ROLE", "User"]
