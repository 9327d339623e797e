"""Auth Schemas — register/login bodies and the token envelope.

Invariants:
    - email must contain exactly one '@' with non-empty sides; normalization happens in AuthService
    - password is never echoed back in any response
    - role defaults to "user"; the legacy key "rol" is accepted as an alias
"""

from pydantic import AliasChoices, BaseModel, Field

from gestion_bovina.core.domain_types import UserRole

_EMAIL_PATTERN = r"^\s*[^@\s]+@[^@\s]+\s*$"


class RegisterRequest(BaseModel):
    email: str = Field(max_length=320, pattern=_EMAIL_PATTERN)
    password: str = Field(min_length=1, max_length=1024)
    role: UserRole = Field(
        UserRole.USER, validation_alias=AliasChoices("role", "rol"),
    )


class LoginRequest(BaseModel):
    email: str = Field(max_length=320)
    password: str = Field(max_length=1024)


class TokenResponse(BaseModel):
    token: str
