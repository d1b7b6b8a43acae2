"""
HSR Tools - User API routes.

Profile and owned-character roster of the signed-in user. Every route
requires a Bearer access token.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import selectinload

from api.models.common import MessageResponse
from api.models.user import (
    SetUIDRequest,
    UserCharacterCreate,
    UserCharacterResponse,
    UserCharacterUpdate,
    UserResponse,
    UserWithCharactersResponse,
)
from api.routes.auth import get_current_user
from database.connection import get_async_session
from database.models import Character, User, UserCharacter

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/users")


def _with_character():
    """Eager-load the owned character with its element and path."""
    return selectinload(UserCharacter.character).options(
        selectinload(Character.element),
        selectinload(Character.path),
    )


@router.get("/me", response_model=UserWithCharactersResponse)
async def get_me(current_user: User = Depends(get_current_user)) -> User:
    """Return the signed-in user with their roster."""
    async with get_async_session() as session:
        result = await session.execute(
            select(User)
            .where(User.id == current_user.id)
            .options(selectinload(User.characters).options(_with_character()))
        )
        user = result.scalar_one_or_none()

    if user is None:
        raise HTTPException(status_code=404, detail="User not found")
    return user


@router.patch("/uid", response_model=UserResponse)
async def set_uid(
    body: SetUIDRequest,
    current_user: User = Depends(get_current_user),
) -> User:
    """Link an in-game UID (and nickname) to the signed-in user."""
    async with get_async_session() as session:
        user = await session.get(User, current_user.id)
        if user is None:
            raise HTTPException(status_code=404, detail="User not found")

        user.uid = body.uid
        user.nickname = body.nickname
        try:
            await session.commit()
        except IntegrityError:
            await session.rollback()
            raise HTTPException(status_code=409, detail="UID already linked to another account")
        await session.refresh(user)

    logger.info(f"User {user.id} linked UID {user.uid}")
    return user


@router.get("/characters", response_model=list[UserCharacterResponse])
async def list_user_characters(
    current_user: User = Depends(get_current_user),
) -> list[UserCharacter]:
    """List the characters owned by the signed-in user."""
    async with get_async_session() as session:
        result = await session.execute(
            select(UserCharacter)
            .where(UserCharacter.user_id == current_user.id)
            .options(_with_character())
            .order_by(UserCharacter.created_at)
        )
        return list(result.scalars().all())


@router.post("/characters", response_model=UserCharacterResponse, status_code=201)
async def add_user_character(
    body: UserCharacterCreate,
    current_user: User = Depends(get_current_user),
) -> UserCharacter:
    """
    Add a character to the roster.

    Adding a character already owned overwrites its eidolon (and level when
    given) instead of failing.
    """
    async with get_async_session() as session:
        if await session.get(Character, body.character_id) is None:
            raise HTTPException(status_code=404, detail="Character not found")

        result = await session.execute(
            select(UserCharacter).where(
                UserCharacter.user_id == current_user.id,
                UserCharacter.character_id == body.character_id,
            )
        )
        owned = result.scalar_one_or_none()

        if owned is None:
            owned = UserCharacter(
                user_id=current_user.id,
                character_id=body.character_id,
                eidolon=body.eidolon,
                level=body.level or 1,
            )
            session.add(owned)
        else:
            owned.eidolon = body.eidolon
            if body.level is not None:
                owned.level = body.level

        await session.commit()

        result = await session.execute(
            select(UserCharacter)
            .where(UserCharacter.id == owned.id)
            .options(_with_character())
            .execution_options(populate_existing=True)
        )
        return result.scalar_one()


@router.patch("/characters/{character_id}", response_model=MessageResponse)
async def update_user_character(
    character_id: str,
    body: UserCharacterUpdate,
    current_user: User = Depends(get_current_user),
) -> MessageResponse:
    """Change eidolon and/or level of an owned character."""
    async with get_async_session() as session:
        result = await session.execute(
            select(UserCharacter).where(
                UserCharacter.user_id == current_user.id,
                UserCharacter.character_id == character_id,
            )
        )
        owned = result.scalar_one_or_none()
        if owned is None:
            raise HTTPException(status_code=404, detail="Character not found")

        if body.eidolon is not None:
            owned.eidolon = body.eidolon
        if body.level is not None:
            owned.level = body.level
        await session.commit()

    return MessageResponse(message="Updated successfully")


@router.delete("/characters/{character_id}", response_model=MessageResponse)
async def delete_user_character(
    character_id: str,
    current_user: User = Depends(get_current_user),
) -> MessageResponse:
    """Remove a character from the roster."""
    async with get_async_session() as session:
        result = await session.execute(
            delete(UserCharacter).where(
                UserCharacter.user_id == current_user.id,
                UserCharacter.character_id == character_id,
            )
        )
        if result.rowcount == 0:
            raise HTTPException(status_code=404, detail="Character not found")
        await session.commit()

    return MessageResponse(message="Deleted successfully")
