"""
HSR Tools - Game data API routes.

Public read-only endpoints for characters (with skills and recommended
builds), banners, redemption codes and events.
"""

import logging
from datetime import datetime, UTC
from typing import Literal

from fastapi import APIRouter, HTTPException, Query
from sqlalchemy import select
from sqlalchemy.orm import selectinload

from api.models.game_data import (
    BannerResponse,
    CharacterDetail,
    CharacterListItem,
    CodeResponse,
    EventResponse,
)
from database.connection import get_async_session
from database.models import (
    Banner,
    BannerCharacter,
    Character,
    CharacterBuild,
    Code,
    Element,
    Event,
    Path,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api")

# Sortable columns exposed through ?sort=
SORT_COLUMNS = {
    "release_order": Character.release_order,
    "name": Character.name,
    "rarity": Character.rarity,
    "base_speed": Character.base_speed,
}


# =============================================================================
# Characters
# =============================================================================


@router.get("/characters", response_model=list[CharacterListItem])
async def list_characters(
    element: str | None = Query(None, description="Element name, e.g. Quantum"),
    path: str | None = Query(None, description="Path name, e.g. The Hunt"),
    rarity: int | None = Query(None, ge=4, le=5),
    sort: Literal["release_order", "name", "rarity", "base_speed"] = Query("release_order"),
    order: Literal["asc", "desc"] = Query("desc"),
) -> list[CharacterListItem]:
    """List characters with optional element/path/rarity filters."""
    query = select(Character).options(
        selectinload(Character.element),
        selectinload(Character.path),
    )

    if element:
        query = query.join(Character.element).where(Element.name == element)
    if path:
        query = query.join(Character.path).where(Path.name == path)
    if rarity is not None:
        query = query.where(Character.rarity == rarity)

    column = SORT_COLUMNS[sort]
    query = query.order_by(column.desc() if order == "desc" else column.asc(), Character.id)

    async with get_async_session() as session:
        result = await session.execute(query)
        characters = result.scalars().all()

    return [
        CharacterListItem(
            id=character.id,
            char_id=character.char_id,
            name=character.name,
            element=character.element.name,
            path=character.path.name,
            rarity=character.rarity,
            base_speed=character.base_speed,
            release_order=character.release_order,
        )
        for character in characters
    ]


@router.get("/characters/{character_id}", response_model=CharacterDetail)
async def get_character(character_id: str) -> Character:
    """Return one character with skills, build, substats and relic sets."""
    async with get_async_session() as session:
        result = await session.execute(
            select(Character)
            .where(Character.id == character_id)
            .options(
                selectinload(Character.element),
                selectinload(Character.path),
                selectinload(Character.skills),
                selectinload(Character.build).options(
                    selectinload(CharacterBuild.substats),
                    selectinload(CharacterBuild.sets),
                ),
            )
        )
        character = result.scalar_one_or_none()

    if character is None:
        raise HTTPException(status_code=404, detail="Character not found")
    return character


# =============================================================================
# Banners / Codes / Events
# =============================================================================


@router.get("/banners", response_model=list[BannerResponse])
async def list_banners(
    active: bool = Query(True, description="Only banners running right now"),
) -> list[Banner]:
    """List banners, newest first."""
    query = select(Banner).options(
        selectinload(Banner.characters).selectinload(BannerCharacter.character)
    )
    if active:
        now = datetime.now(UTC)
        query = query.where(Banner.start_date <= now, Banner.end_date >= now)

    async with get_async_session() as session:
        result = await session.execute(query.order_by(Banner.start_date.desc()))
        return list(result.scalars().all())


@router.get("/codes", response_model=list[CodeResponse])
async def list_codes(
    include_all: bool = Query(False, alias="all", description="Include inactive codes"),
) -> list[Code]:
    """List redemption codes, newest first."""
    query = select(Code)
    if not include_all:
        query = query.where(Code.is_active.is_(True))

    async with get_async_session() as session:
        result = await session.execute(query.order_by(Code.created_at.desc()))
        return list(result.scalars().all())


@router.get("/events", response_model=list[EventResponse])
async def list_events(
    include_all: bool = Query(False, alias="all", description="Include past and upcoming events"),
) -> list[Event]:
    """List events, newest first."""
    query = select(Event)
    if not include_all:
        now = datetime.now(UTC)
        query = query.where(Event.start_date <= now, Event.end_date >= now)

    async with get_async_session() as session:
        result = await session.execute(query.order_by(Event.start_date.desc()))
        return list(result.scalars().all())
