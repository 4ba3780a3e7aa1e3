"""Authentication service for registration, sign-in and token handling."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from userhub.domain.user import ADMIN_ROLE, EmailAlreadyExistsError, User
from userhub.exceptions import (
    InvalidCredentialsError,
    InvalidTokenError,
    RegistrationFailedError,
)
from userhub.identity.tokens import TokenType

if TYPE_CHECKING:
    from userhub.identity import (
        IdentityStoreContract,
        PasswordHasher,
        TokenIssuer,
        TokenPair,
    )

logger = logging.getLogger(__name__)


class AuthenticationService:
    """
    Identity-side orchestration of registration and sign-in.

    Users are read and written through the store contracts only.
    """

    def __init__(
        self,
        user_store: IdentityStoreContract,
        password_hasher: PasswordHasher,
        token_issuer: TokenIssuer,
    ):
        self._store = user_store
        self._hasher = password_hasher
        self._tokens = token_issuer

    @staticmethod
    def normalize_name(user_name: str) -> str:
        return user_name.strip().lower()

    async def register(
        self,
        email: str,
        password: str,
        first_name: str | None = None,
        last_name: str | None = None,
    ) -> tuple[User, TokenPair]:
        normalized_name = self.normalize_name(email)

        existing_user = await self._store.find_by_name(normalized_name)
        if existing_user is not None:
            raise EmailAlreadyExistsError(email)

        password_hash = self._hasher.hash(password)

        user = User.create(email, first_name=first_name, last_name=last_name)
        await self._store.set_normalized_user_name(user, normalized_name)
        await self._store.set_password_hash(user, password_hash)

        result = await self._store.create(user)
        if not result.succeeded:
            raise RegistrationFailedError(str(result))

        logger.info("User registered: %s", user.email)
        return user, self._tokens.issue(user)

    async def login(self, email: str, password: str) -> tuple[User, TokenPair]:
        user = await self._store.find_by_name(self.normalize_name(email))
        if user is None:
            raise InvalidCredentialsError

        check = self._hasher.check(password, await self._store.get_password_hash(user))
        if not check.matches:
            logger.info("Failed sign-in for %s", user.email)
            raise InvalidCredentialsError

        if check.upgraded_hash is not None:
            await self._store.set_password_hash(user, check.upgraded_hash)
            await self._store.update(user)
            logger.info("Rehashed password for %s", user.email)

        logger.info("User signed in: %s", user.email)
        return user, self._tokens.issue(user)

    async def refresh_token(self, refresh_token: str) -> TokenPair:
        claims = self._tokens.decode(refresh_token, TokenType.REFRESH)

        user = await self._store.find_by_id(claims.subject)
        if user is None:
            msg = "User not found"
            raise InvalidTokenError(msg)

        return self._tokens.issue(user)

    async def resolve_user(self, access_token: str) -> User:
        claims = self._tokens.decode(access_token, TokenType.ACCESS)

        user = await self._store.find_by_id(claims.subject)
        if user is None:
            logger.warning("User not found for token: %s", claims.user_id)
            msg = "User not found"
            raise InvalidTokenError(msg)

        return user

    async def is_admin(self, user: User) -> bool:
        return ADMIN_ROLE in await self._store.get_roles(user)
