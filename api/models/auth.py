"""
HSR Tools - Authentication Pydantic schemas.
"""

import re

from pydantic import Field, field_validator

from api.models.common import CamelModel
from api.models.user import UserResponse

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
PASSWORD_MAX_BYTES = 72


def _validate_email(v: str) -> str:
    v = v.strip()
    if not _EMAIL_RE.match(v):
        raise ValueError("Invalid email address")
    return v


def _validate_password_bytes(v: str) -> str:
    # bcrypt only hashes the first 72 bytes
    if len(v.encode("utf-8")) > PASSWORD_MAX_BYTES:
        raise ValueError(f"Password must be at most {PASSWORD_MAX_BYTES} bytes")
    return v


class RegisterRequest(CamelModel):
    """Schema for creating an account."""

    email: str = Field(..., max_length=255)
    password: str = Field(
        ...,
        min_length=8,
        max_length=PASSWORD_MAX_BYTES,
        description="Password (at least 8 characters, at most 72 bytes UTF-8)",
    )
    name: str = Field(..., min_length=1, max_length=100)

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        return _validate_email(v)

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: str) -> str:
        return _validate_password_bytes(v)


class LoginRequest(CamelModel):
    email: str = Field(..., max_length=255)
    password: str = Field(..., min_length=1, max_length=PASSWORD_MAX_BYTES)

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        return _validate_email(v)

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: str) -> str:
        return _validate_password_bytes(v)


class RefreshRequest(CamelModel):
    refresh_token: str = Field(..., min_length=1)


class TokenPair(CamelModel):
    """Access token plus the refresh token used to mint the next pair."""

    token: str
    refresh_token: str


class AuthResponse(TokenPair):
    user: UserResponse
