"""Signed session tokens for signed-in users.

A sign-in yields a :class:`TokenPair`: a short-lived access token sent as
the bearer credential and a long-lived refresh token that buys a new pair.
Decoding yields :class:`TokenClaims`, which carry the ``user_id`` of a
:class:`~userhub.domain.user.UserIdentity` so the claims can be handed to
anything that resolves users by identity.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from enum import StrEnum
from typing import TYPE_CHECKING
from uuid import UUID

import jwt

from userhub.exceptions import InvalidTokenError

if TYPE_CHECKING:
    from userhub.domain.user import User


class TokenType(StrEnum):
    ACCESS = "access"
    REFRESH = "refresh"


@dataclass(frozen=True)
class TokenClaims:
    user_id: UUID
    email: str
    token_type: TokenType
    expires_at: datetime

    @property
    def subject(self) -> str:
        """The user id in the string form user stores look users up by."""
        return str(self.user_id)


@dataclass(frozen=True)
class TokenPair:
    access_token: str
    refresh_token: str
    expires_in: int


class TokenIssuer:
    """Issue and decode HS256-signed token pairs for users."""

    ALGORITHM = "HS256"

    def __init__(
        self,
        secret_key: str,
        *,
        access_lifetime: timedelta,
        refresh_lifetime: timedelta,
    ):
        if not secret_key:
            msg = "Token signing key cannot be empty"
            raise ValueError(msg)

        self._secret_key = secret_key
        self._lifetimes = {
            TokenType.ACCESS: access_lifetime,
            TokenType.REFRESH: refresh_lifetime,
        }

    def issue(self, user: User) -> TokenPair:
        issued_at = datetime.now(tz=timezone.utc)
        return TokenPair(
            access_token=self._encode(user, TokenType.ACCESS, issued_at),
            refresh_token=self._encode(user, TokenType.REFRESH, issued_at),
            expires_in=int(self._lifetimes[TokenType.ACCESS].total_seconds()),
        )

    def decode(self, token: str, expected: TokenType) -> TokenClaims:
        """Verify ``token`` and return its claims.

        Raises
        ------
        InvalidTokenError
            If the token is expired, tampered with, malformed or of
            another type than ``expected``
        """
        try:
            raw = jwt.decode(token, self._secret_key, algorithms=[self.ALGORITHM])
        except jwt.ExpiredSignatureError as e:
            raise InvalidTokenError("Token has expired") from e
        except jwt.InvalidTokenError as e:
            raise InvalidTokenError(f"Invalid token: {e}") from e

        try:
            claims = TokenClaims(
                user_id=UUID(raw["sub"]),
                email=raw["email"],
                token_type=TokenType(raw["type"]),
                expires_at=datetime.fromtimestamp(raw["exp"], tz=timezone.utc),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise InvalidTokenError(f"Malformed token payload: {e}") from e

        if claims.token_type is not expected:
            msg = f"Expected {expected} token, got {claims.token_type}"
            raise InvalidTokenError(msg)

        return claims

    def _encode(self, user: User, token_type: TokenType, issued_at: datetime) -> str:
        claims = {
            "sub": str(user.id),
            "email": user.email,
            "type": token_type.value,
            "iat": issued_at,
            "exp": issued_at + self._lifetimes[token_type],
        }
        return jwt.encode(claims, self._secret_key, algorithm=self.ALGORITHM)
