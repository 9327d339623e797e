"""Request Dependencies — service wiring and bearer-token authentication.

Invariants:
    - Services are built per request around the request's AsyncSession
    - get_current_user raises UnauthorizedError when the header is missing, not Bearer,
      the token is invalid, or its user no longer exists
    - On success the resolved user is stored on request.state.user

Design Decisions:
    - HTTPBearer(auto_error=False): missing credentials go through our error envelope
      instead of FastAPI's default 403
    - FastAPI caches dependencies per request: routes may depend on get_current_user
      again without a second lookup
"""

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from gestion_bovina.config import get_settings
from gestion_bovina.core.errors import UnauthorizedError
from gestion_bovina.core.repository_protocols import UserLike
from gestion_bovina.infrastructure.database import get_db
from gestion_bovina.infrastructure.repositories import (
    SqlAnimalRepository, SqlUserRepository,
)
from gestion_bovina.services.animal_service import AnimalService
from gestion_bovina.services.auth_service import AuthService

bearer_scheme = HTTPBearer(auto_error=False)


def get_auth_service(db: AsyncSession = Depends(get_db)) -> AuthService:
    settings = get_settings()
    return AuthService(
        SqlUserRepository(db),
        secret=settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
        expires_minutes=settings.access_token_expire_minutes,
    )


def get_animal_service(db: AsyncSession = Depends(get_db)) -> AnimalService:
    return AnimalService(SqlAnimalRepository(db))


async def get_current_user(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    auth: AuthService = Depends(get_auth_service),
) -> UserLike:
    """Resolve the bearer token to a stored user."""
    if credentials is None:
        raise UnauthorizedError("Not authenticated")
    user = await auth.resolve_user(credentials.credentials)
    request.state.user = user
    return user
