"""
HSR Tools - API Models module.
"""

from api.models.auth import (
    AuthResponse,
    LoginRequest,
    RefreshRequest,
    RegisterRequest,
    TokenPair,
)
from api.models.common import CamelModel, MessageResponse
from api.models.game_data import (
    BannerCharacterResponse,
    BannerResponse,
    BuildSetResponse,
    BuildSubstatResponse,
    CharacterBase,
    CharacterBuildResponse,
    CharacterDetail,
    CharacterListItem,
    CharacterSkillResponse,
    CharacterSummary,
    CodeResponse,
    ElementResponse,
    EventResponse,
    PathResponse,
    RelicSetResponse,
)
from api.models.user import (
    SetUIDRequest,
    UserCharacterCreate,
    UserCharacterResponse,
    UserCharacterUpdate,
    UserResponse,
    UserWithCharactersResponse,
)

__all__ = [
    # Common
    "CamelModel",
    "MessageResponse",
    # Auth
    "AuthResponse",
    "LoginRequest",
    "RefreshRequest",
    "RegisterRequest",
    "TokenPair",
    # Game data
    "BannerCharacterResponse",
    "BannerResponse",
    "BuildSetResponse",
    "BuildSubstatResponse",
    "CharacterBase",
    "CharacterBuildResponse",
    "CharacterDetail",
    "CharacterListItem",
    "CharacterSkillResponse",
    "CharacterSummary",
    "CodeResponse",
    "ElementResponse",
    "EventResponse",
    "PathResponse",
    "RelicSetResponse",
    # Users
    "SetUIDRequest",
    "UserCharacterCreate",
    "UserCharacterResponse",
    "UserCharacterUpdate",
    "UserResponse",
    "UserWithCharactersResponse",
]
