"""Role membership entity."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID

from userhub.domain.shared.time import utc_now


@dataclass(frozen=True)
class UserRoleMembership:
    """Association between a user and a role name.

    Membership is a plain ``(user_id, role_name)`` pair; it also satisfies
    the ``UserIdentity`` capability through ``user_id``.
    """

    user_id: UUID
    role_name: str
    created_at: datetime = field(default_factory=utc_now, compare=False)

    def __str__(self) -> str:
        return self.role_name
