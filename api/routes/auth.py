"""
HSR Tools - Authentication API routes.

Email/password registration and login issuing a JWT access token plus a
longer-lived refresh token. ``get_current_user`` is the dependency every
protected route uses.
"""

import logging
import uuid
from datetime import datetime, timedelta, UTC
from typing import Any

from fastapi import APIRouter, Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from passlib.hash import bcrypt
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from api.middleware.rate_limit import rate_limit
from api.models.auth import (
    AuthResponse,
    LoginRequest,
    RefreshRequest,
    RegisterRequest,
    TokenPair,
)
from api.models.user import UserResponse
from database.connection import get_async_session
from database.models import User
from shared.config import get_settings

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth")

# JWT Configuration
ALGORITHM = "HS256"
ACCESS_TOKEN_TYPE = "access"
REFRESH_TOKEN_TYPE = "refresh"

# Security
security = HTTPBearer(auto_error=False)


# =============================================================================
# Authentication Helpers
# =============================================================================


def _create_token(user_id: uuid.UUID, email: str, token_type: str, lifetime: timedelta) -> str:
    settings = get_settings()
    now = datetime.now(UTC)

    payload = {
        "sub": str(user_id),
        "email": email,
        "type": token_type,
        "jti": str(uuid.uuid4()),
        "exp": now + lifetime,
        "iat": now,
    }

    return jwt.encode(payload, settings.JWT_SECRET, algorithm=ALGORITHM)


def create_access_token(user_id: uuid.UUID, email: str) -> str:
    """Create a short-lived access token."""
    settings = get_settings()
    return _create_token(
        user_id,
        email,
        ACCESS_TOKEN_TYPE,
        timedelta(hours=settings.ACCESS_TOKEN_EXPIRE_HOURS),
    )


def create_refresh_token(user_id: uuid.UUID, email: str) -> str:
    """Create a refresh token, only accepted by ``/api/auth/refresh``."""
    settings = get_settings()
    return _create_token(
        user_id,
        email,
        REFRESH_TOKEN_TYPE,
        timedelta(days=settings.REFRESH_TOKEN_EXPIRE_DAYS),
    )


def create_token_pair(user: User) -> TokenPair:
    return TokenPair(
        token=create_access_token(user.id, user.email),
        refresh_token=create_refresh_token(user.id, user.email),
    )


def verify_token(token: str, expected_type: str) -> dict[str, Any]:
    """
    Verify JWT token and return payload.

    Args:
        token: JWT token string
        expected_type: "access" or "refresh"

    Returns:
        Token payload dict

    Raises:
        HTTPException 401: Invalid, expired or wrong-type token
    """
    settings = get_settings()

    try:
        payload = jwt.decode(token, settings.JWT_SECRET, algorithms=[ALGORITHM])
    except JWTError as e:
        logger.warning(f"JWT validation failed: {e}")
        raise HTTPException(
            status_code=401,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"},
        )

    if payload.get("type") != expected_type:
        raise HTTPException(status_code=401, detail="Invalid token type")

    if not payload.get("sub"):
        raise HTTPException(status_code=401, detail="Invalid token payload")

    return payload


def _user_id_from(payload: dict[str, Any]) -> uuid.UUID:
    try:
        return uuid.UUID(payload["sub"])
    except ValueError:
        raise HTTPException(status_code=401, detail="Invalid token payload")


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
) -> User:
    """
    Validate the Bearer access token and return the user from the database.

    Raises:
        HTTPException 401: Missing/invalid token or user no longer exists
    """
    if not credentials:
        raise HTTPException(
            status_code=401,
            detail="Missing authentication token",
            headers={"WWW-Authenticate": "Bearer"},
        )

    payload = verify_token(credentials.credentials, ACCESS_TOKEN_TYPE)
    user_id = _user_id_from(payload)

    async with get_async_session() as session:
        user = await session.get(User, user_id)

    if user is None:
        raise HTTPException(status_code=401, detail="User not found")

    return user


# =============================================================================
# Authentication Endpoints
# =============================================================================


@router.post("/register", response_model=AuthResponse, status_code=201)
async def register(body: RegisterRequest) -> AuthResponse:
    """Create an account and sign it in."""
    async with get_async_session() as session:
        result = await session.execute(select(User.id).where(User.email == body.email))
        if result.scalar_one_or_none() is not None:
            raise HTTPException(status_code=409, detail="Email already registered")

        user = User(
            email=body.email,
            password_hash=bcrypt.hash(body.password),
            name=body.name,
        )
        session.add(user)
        try:
            await session.commit()
        except IntegrityError:
            await session.rollback()
            raise HTTPException(status_code=409, detail="Email already registered")

    logger.info(f"Registered user {user.id}")
    tokens = create_token_pair(user)
    return AuthResponse(
        token=tokens.token,
        refresh_token=tokens.refresh_token,
        user=UserResponse.model_validate(user),
    )


@router.post(
    "/login",
    response_model=AuthResponse,
    dependencies=[Depends(rate_limit("login", "RATE_LIMIT_LOGIN_PER_MINUTE"))],
)
async def login(body: LoginRequest) -> AuthResponse:
    """Exchange email and password for a token pair."""
    async with get_async_session() as session:
        result = await session.execute(select(User).where(User.email == body.email))
        user = result.scalar_one_or_none()

    if user is None or not bcrypt.verify(body.password, user.password_hash):
        logger.warning("Failed login attempt")
        raise HTTPException(status_code=401, detail="Invalid email or password")

    tokens = create_token_pair(user)
    return AuthResponse(
        token=tokens.token,
        refresh_token=tokens.refresh_token,
        user=UserResponse.model_validate(user),
    )


@router.post("/refresh", response_model=TokenPair)
async def refresh(body: RefreshRequest) -> TokenPair:
    """Mint a fresh token pair from a valid refresh token."""
    try:
        payload = verify_token(body.refresh_token, REFRESH_TOKEN_TYPE)
    except HTTPException:
        raise HTTPException(status_code=401, detail="Invalid refresh token")

    user_id = _user_id_from(payload)

    async with get_async_session() as session:
        user = await session.get(User, user_id)

    if user is None:
        raise HTTPException(status_code=401, detail="Invalid refresh token")

    return create_token_pair(user)
