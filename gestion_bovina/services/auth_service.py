"""Auth Service — registration, login and token-to-user resolution.

Invariants:
    - Unknown email and wrong password raise the same InvalidCredentialsError
    - Emails are normalized (stripped, lower-cased) before every lookup and insert
    - register returns a token immediately (no separate login step required)
    - resolve_user re-reads the user on every call; a token for a missing user is 401
    - No server-side session state: the token is the session

Design Decisions:
    - Password verification still runs for unknown emails (against a dummy hash) so
      both failure paths cost about the same
    - Token settings injected at construction: the service never reads global config
"""

import logging

from gestion_bovina.core.domain_types import UserRole
from gestion_bovina.core.errors import (
    ConflictError, InvalidCredentialsError, UnauthorizedError,
)
from gestion_bovina.core.repository_protocols import UserLike, UserRepository
from gestion_bovina.core.security import (
    hash_password, issue_token, verify_password, verify_token,
)

logger = logging.getLogger(__name__)

_DUMMY_HASH, _ = hash_password("gestion-bovina-timing-guard")


def normalize_email(email: str) -> str:
    return email.strip().lower()


class AuthService:
    """Credential checks and token issuance."""

    def __init__(
        self,
        users: UserRepository,
        secret: str,
        algorithm: str = "HS256",
        expires_minutes: int | None = None,
    ):
        self.users = users
        self.secret = secret
        self.algorithm = algorithm
        self.expires_minutes = expires_minutes

    def _issue(self, user: UserLike) -> str:
        return issue_token(
            user.id, self.secret, self.algorithm, self.expires_minutes,
        )

    async def login(self, email: str, password: str) -> str:
        """Verify credentials and return a signed token."""
        user = await self.users.get_by_email(normalize_email(email))
        if user is None:
            verify_password(password, _DUMMY_HASH)
            logger.warning("Login failed: unknown email")
            raise InvalidCredentialsError()
        if not verify_password(password, user.password_hash):
            logger.warning("Login failed: wrong password", extra={"user_id": user.id})
            raise InvalidCredentialsError()
        logger.info("User logged in", extra={"user_id": user.id})
        return self._issue(user)

    async def register(
        self, email: str, password: str, role: UserRole = UserRole.USER,
    ) -> str:
        """Create an account and return a token for it."""
        email = normalize_email(email)
        if await self.users.get_by_email(email) is not None:
            logger.warning("Registration rejected: email already in use")
            raise ConflictError("This user already exists")
        password_hash, salt = hash_password(password)
        user = await self.users.add(email, password_hash, salt, role)
        logger.info(
            f"User registered with role {user.role.value}",
            extra={"user_id": user.id},
        )
        return self._issue(user)

    async def resolve_user(self, token: str) -> UserLike:
        """Map a bearer token to a stored user or raise UnauthorizedError."""
        user_id = verify_token(token, self.secret, self.algorithm)
        user = await self.users.get_by_id(user_id)
        if user is None:
            logger.warning("Token subject no longer exists", extra={"user_id": user_id})
            raise UnauthorizedError("User no longer exists")
        return user
