"""Auth Routes — account registration and login.

Invariants:
    - Both routes are public (no bearer token)
    - POST /register → 201 {token}; duplicate email → 409
    - POST /login → 200 {token}; bad email or password → 401 with one shared message
"""

import logging

from fastapi import APIRouter, Depends, status

from gestion_bovina.api.dependencies import get_auth_service
from gestion_bovina.schemas.auth import LoginRequest, RegisterRequest, TokenResponse
from gestion_bovina.services.auth_service import AuthService

logger = logging.getLogger(__name__)
router = APIRouter(tags=["auth"])


@router.post(
    "/register", response_model=TokenResponse,
    status_code=status.HTTP_201_CREATED,
)
async def register(
    body: RegisterRequest, auth: AuthService = Depends(get_auth_service),
):
    """Create an account and log it in."""
    token = await auth.register(body.email, body.password, body.role)
    return TokenResponse(token=token)


@router.post("/login", response_model=TokenResponse)
async def login(
    body: LoginRequest, auth: AuthService = Depends(get_auth_service),
):
    """Exchange credentials for a bearer token."""
    token = await auth.login(body.email, body.password)
    return TokenResponse(token=token)
