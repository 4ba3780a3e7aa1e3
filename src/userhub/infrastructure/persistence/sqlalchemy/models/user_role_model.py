"""SQLAlchemy model for role memberships."""

from datetime import datetime
from uuid import UUID, uuid4

from sqlalchemy import DateTime, String, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from userhub.domain.shared.time import utc_now
from userhub.infrastructure.persistence.sqlalchemy.models.base import Base


class UserRoleModel(Base):
    """SQLAlchemy model for a (user, role) membership.

    There is no foreign key to ``users``: the user record and
    its memberships are deleted by two independent store calls.
    """

    __tablename__ = "user_roles"
    __table_args__ = (
        UniqueConstraint("user_id", "role_name", name="uq_user_roles_user_role"),
    )

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    user_id: Mapped[UUID] = mapped_column(Uuid, nullable=False, index=True)
    role_name: Mapped[str] = mapped_column(String(64), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utc_now,
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<UserRoleModel(user_id={self.user_id}, role_name={self.role_name})>"
