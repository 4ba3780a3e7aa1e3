"""bcrypt password hashing for stored credentials."""

from __future__ import annotations

from dataclasses import dataclass

import bcrypt

from userhub.exceptions import WeakPasswordError


@dataclass(frozen=True)
class PasswordCheck:
    """Outcome of checking a password against a stored hash.

    ``upgraded_hash`` is set only for a matching password whose stored hash
    was made with another work factor; the caller should persist it.
    """

    matches: bool
    upgraded_hash: str | None = None


class PasswordHasher:
    MIN_LENGTH = 8
    MAX_BYTES = 72

    def __init__(self, rounds: int = 12):
        self._rounds = rounds

    def hash(self, password: str) -> str:
        """Hash a new password.

        Raises
        ------
        WeakPasswordError
            If the password is shorter than 8 characters or takes more than
            72 bytes as UTF-8 (the bcrypt input limit)
        """
        if len(password) < self.MIN_LENGTH:
            msg = f"Password must be at least {self.MIN_LENGTH} characters"
            raise WeakPasswordError(msg)
        if len(password.encode("utf-8")) > self.MAX_BYTES:
            msg = f"Password cannot exceed {self.MAX_BYTES} bytes"
            raise WeakPasswordError(msg)

        return self._hash(password)

    def check(self, password: str, stored_hash: str | None) -> PasswordCheck:
        if not stored_hash:
            return PasswordCheck(matches=False)

        try:
            matches = bcrypt.checkpw(
                password.encode("utf-8"),
                stored_hash.encode("utf-8"),
            )
        except ValueError:
            # Not a bcrypt hash
            return PasswordCheck(matches=False)

        if not matches:
            return PasswordCheck(matches=False)

        if _work_factor(stored_hash) == self._rounds:
            return PasswordCheck(matches=True)

        # Length rules apply to new passwords only
        return PasswordCheck(matches=True, upgraded_hash=self._hash(password))

    def _hash(self, password: str) -> str:
        salt = bcrypt.gensalt(rounds=self._rounds)
        return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def _work_factor(stored_hash: str) -> int | None:
    # $2b$<rounds>$<salt+digest>
    parts = stored_hash.split("$")
    try:
        return int(parts[2])
    except (IndexError, ValueError):
        return None
