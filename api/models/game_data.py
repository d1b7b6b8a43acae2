"""
HSR Tools - Game data Pydantic schemas.

Read-only views of characters (with skills and recommended builds),
banners, redemption codes and events.
"""

from datetime import datetime

from api.models.common import CamelModel


# =============================================================================
# Lookup Schemas
# =============================================================================


class ElementResponse(CamelModel):
    id: int
    name: str
    icon_url: str | None = None


class PathResponse(CamelModel):
    id: int
    name: str
    icon_url: str | None = None


class RelicSetResponse(CamelModel):
    id: int
    name: str
    type: str | None = None


# =============================================================================
# Character Schemas
# =============================================================================


class CharacterBase(CamelModel):
    """Character columns without any relationship."""

    id: str
    char_id: str
    name: str
    element_id: int
    path_id: int
    rarity: int
    base_speed: int
    release_order: int


class CharacterSummary(CharacterBase):
    """Character with its element and path embedded."""

    element: ElementResponse
    path: PathResponse


class CharacterListItem(CamelModel):
    """Row of the character list; element and path are flattened to names."""

    id: str
    char_id: str
    name: str
    element: str
    path: str
    rarity: int
    base_speed: int
    release_order: int


class CharacterSkillResponse(CamelModel):
    id: int
    character_id: str
    basic_multiplier: float
    skill_multiplier: float
    ult_multiplier: float
    basic_energy: int
    skill_energy: int
    ult_cost: int
    ult_type: str
    passive: str | None = None
    base_atk: int
    base_crit_rate: float
    base_crit_dmg: float


class BuildSubstatResponse(CamelModel):
    id: int
    stat_name: str
    weight: float


class BuildSetResponse(CamelModel):
    id: int
    relic_set_id: int
    priority: int
    relic_set: RelicSetResponse


class CharacterBuildResponse(CamelModel):
    """Recommended build; substats by descending weight, sets by priority."""

    id: int
    character_id: str
    body_main: str | None = None
    feet_main: str | None = None
    orb_main: str | None = None
    rope_main: str | None = None
    substats: list[BuildSubstatResponse] = []
    sets: list[BuildSetResponse] = []


class CharacterDetail(CharacterSummary):
    """Full character view served by ``GET /api/characters/{id}``."""

    skills: CharacterSkillResponse | None = None
    build: CharacterBuildResponse | None = None


# =============================================================================
# Banner / Code / Event Schemas
# =============================================================================


class BannerCharacterResponse(CamelModel):
    id: int
    banner_id: int
    character_id: str
    is_featured: bool
    character: CharacterBase


class BannerResponse(CamelModel):
    id: int
    name: str
    type: str | None = None
    start_date: datetime
    end_date: datetime
    image_url: str | None = None
    characters: list[BannerCharacterResponse] = []


class CodeResponse(CamelModel):
    id: int
    code: str
    rewards: str | None = None
    is_active: bool
    expires_at: datetime | None = None
    created_at: datetime


class EventResponse(CamelModel):
    id: int
    name: str
    type: str | None = None
    description: str | None = None
    start_date: datetime
    end_date: datetime
    image_url: str | None = None
