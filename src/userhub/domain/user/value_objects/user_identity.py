"""User identity capability.

Anything exposing a ``user_id`` can be used as a lookup key across the
service and repository boundaries, so callers may pass a full ``User``,
a role membership, a request schema, or a bare ``UserKey``.
"""

from dataclasses import dataclass
from typing import Protocol, runtime_checkable
from uuid import UUID


@runtime_checkable
class UserIdentity(Protocol):
    """Minimal capability of a value that identifies a user."""

    @property
    def user_id(self) -> UUID: ...


@dataclass(frozen=True)
class UserKey:
    """Lightweight identity-only lookup key."""

    user_id: UUID

    def __str__(self) -> str:
        return str(self.user_id)
