"""Identity layer: store contracts, the store adapter, hashing and tokens."""

from userhub.identity.contracts import (
    IdentityErrorDetail,
    IdentityResult,
    IdentityStoreContract,
    UserPasswordStoreContract,
    UserRoleStoreContract,
    UserStoreContract,
)
from userhub.identity.passwords import PasswordCheck, PasswordHasher
from userhub.identity.tokens import TokenClaims, TokenIssuer, TokenPair, TokenType
from userhub.identity.user_store import UserStore

__all__ = [
    "IdentityErrorDetail",
    "IdentityResult",
    "IdentityStoreContract",
    "PasswordCheck",
    "PasswordHasher",
    "TokenClaims",
    "TokenIssuer",
    "TokenPair",
    "TokenType",
    "UserPasswordStoreContract",
    "UserRoleStoreContract",
    "UserStore",
    "UserStoreContract",
]
