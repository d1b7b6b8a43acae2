"""
HSR Tools - User Pydantic schemas.

Schemas for the signed-in user's profile and owned characters.
"""

import re
from datetime import datetime
from uuid import UUID

from pydantic import Field, field_validator

from api.models.common import CamelModel
from api.models.game_data import CharacterSummary


# =============================================================================
# Owned Character Schemas
# =============================================================================


class UserCharacterCreate(CamelModel):
    """Add a character to the roster (or overwrite its eidolon if present)."""

    character_id: str = Field(..., min_length=1, max_length=50)
    eidolon: int = Field(default=0, ge=0, le=6)
    level: int | None = Field(default=None, ge=1, le=80)


class UserCharacterUpdate(CamelModel):
    """Change eidolon and/or level of an owned character."""

    eidolon: int | None = Field(default=None, ge=0, le=6)
    level: int | None = Field(default=None, ge=1, le=80)


class UserCharacterResponse(CamelModel):
    id: UUID
    user_id: UUID
    character_id: str
    eidolon: int
    level: int
    created_at: datetime
    character: CharacterSummary | None = None


# =============================================================================
# User Schemas
# =============================================================================


class SetUIDRequest(CamelModel):
    """Link an in-game account UID to the user."""

    uid: str = Field(..., min_length=1, max_length=20)
    nickname: str | None = Field(default=None, max_length=100)

    @field_validator("uid")
    @classmethod
    def validate_uid(cls, v: str) -> str:
        """Game UIDs are purely numeric."""
        v = v.strip()
        if not re.match(r"^\d+$", v):
            raise ValueError("UID must contain only digits")
        return v


class UserResponse(CamelModel):
    """Public view of a user; never includes the password hash."""

    id: UUID
    email: str
    name: str
    uid: str | None = None
    nickname: str | None = None
    email_verified: bool
    created_at: datetime
    updated_at: datetime


class UserWithCharactersResponse(UserResponse):
    characters: list[UserCharacterResponse] = []
