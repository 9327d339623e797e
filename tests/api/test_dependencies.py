"""Request Dependencies — verifies bearer resolution and the request.state user."""

import pytest
from fastapi.security import HTTPAuthorizationCredentials
from starlette.requests import Request

from gestion_bovina.api.dependencies import get_current_user
from gestion_bovina.core.errors import UnauthorizedError


def _request() -> Request:
    return Request({"type": "http", "method": "GET", "path": "/vacas", "headers": []})


async def test_resolved_user_is_stored_on_request_state(auth_service):
    token = await auth_service.register("rancher@example.com", "s3cret")
    request = _request()

    user = await get_current_user(
        request,
        HTTPAuthorizationCredentials(scheme="Bearer", credentials=token),
        auth_service,
    )

    assert request.state.user is user
    assert request.state.user.email == "rancher@example.com"


async def test_missing_credentials_leave_state_empty(auth_service):
    request = _request()
    with pytest.raises(UnauthorizedError, match="Not authenticated"):
        await get_current_user(request, None, auth_service)
    assert not hasattr(request.state, "user")
