"""
Pytest configuration and shared fixtures for all tests.

This file is automatically loaded by pytest and provides:
- An in-memory SQLite database, recreated for every test
- Database session fixtures
- Seed data directory fixtures
- An HTTP client bound to the FastAPI app
"""

import copy
import json
import os

# Settings are cached on first access, so the test environment must be in
# place before any project module is imported.
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["JWT_SECRET"] = "test-secret-key-with-enough-length-1234"
os.environ["SEED_ON_STARTUP"] = "false"
os.environ["LOG_LEVEL"] = "INFO"

from collections.abc import AsyncGenerator, Callable
from pathlib import Path
from typing import Any

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from api.middleware.rate_limit import get_rate_limiter
from database.connection import AsyncSessionLocal, drop_db, engine, init_db


# =============================================================================
# SAMPLE SOURCE DATA
# =============================================================================

SAMPLE_CHARACTERS: list[dict[str, Any]] = [
    {
        "id": "seele",
        "charId": "1102",
        "name": "Seele",
        "path": "The Hunt",
        "element": "Quantum",
        "rarity": 5,
        "baseSpeed": 115,
        "releaseOrder": 1,
    },
    {
        "id": "march7th",
        "charId": "1001",
        "name": "March 7th",
        "path": "Preservation",
        "element": "Ice",
        "rarity": 4,
        "baseSpeed": 101,
        "releaseOrder": 0,
    },
    {
        "id": "ghost",
        "charId": "9999",
        "name": "Ghost",
        "path": "Unknown Path",
        "element": "Fire",
        "rarity": 4,
        "baseSpeed": 100,
        "releaseOrder": 9,
    },
]

SAMPLE_SKILLS: dict[str, Any] = {
    "seele": {
        "basicMultiplier": 1.0,
        "skillMultiplier": 2.2,
        "ultMultiplier": 4.25,
        "ultType": "single",
        "passive": "Resurgence",
        "baseAtk": 640,
    },
    "march7th": {"ultMultiplier": 1.5, "ultType": "aoe", "baseAtk": 511},
    "ghost": {"baseAtk": 1},
}

SAMPLE_BUILDS: dict[str, Any] = {
    "seele": {
        "name": "Seele",
        "substats": {"CRIT Rate": 1.0, "CRIT DMG": 1.0, "ATK%": 0.75},
        "mainStats": {"body": "CRIT Rate", "feet": "ATK%", "orb": "Quantum DMG", "rope": "ATK%"},
        "sets": ["Genius of Brilliant Stars", "Rutilant Arena"],
    },
    "march7th": {
        "name": "March 7th",
        "substats": {"DEF%": 1.0},
        "mainStats": {"body": "DEF%"},
        "sets": ["Knight of Purity Palace"],
    },
    "ghost": {"substats": {"SPD": 1.0}, "sets": []},
}


def write_sources(
    directory: Path,
    characters: Any = None,
    skills: Any = None,
    builds: Any = None,
) -> Path:
    """Write the three JSON sources into ``directory``; None keeps the sample."""
    directory.mkdir(parents=True, exist_ok=True)
    documents = {
        "characters.json": SAMPLE_CHARACTERS if characters is None else characters,
        "skills.json": SAMPLE_SKILLS if skills is None else skills,
        "optimal-builds.json": SAMPLE_BUILDS if builds is None else builds,
    }
    for filename, document in documents.items():
        (directory / filename).write_text(json.dumps(document), encoding="utf-8")
    return directory


# =============================================================================
# DATABASE FIXTURES
# =============================================================================


@pytest.fixture(autouse=True)
async def database() -> AsyncGenerator[None, None]:
    """Create every table before the test and throw the database away after."""
    await init_db()
    yield
    await drop_db()
    # Drops the single in-memory connection so the next test starts clean
    await engine.dispose()


@pytest.fixture(autouse=True)
def reset_rate_limits() -> None:
    get_rate_limiter().clear_all()


@pytest.fixture
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """Provide a test database session."""
    async with AsyncSessionLocal() as session:
        yield session


# =============================================================================
# SEED DATA FIXTURES
# =============================================================================


@pytest.fixture
def sample_characters() -> list[dict[str, Any]]:
    return copy.deepcopy(SAMPLE_CHARACTERS)


@pytest.fixture
def sample_skills() -> dict[str, Any]:
    return copy.deepcopy(SAMPLE_SKILLS)


@pytest.fixture
def sample_builds() -> dict[str, Any]:
    return copy.deepcopy(SAMPLE_BUILDS)


@pytest.fixture
def data_dir(tmp_path: Path) -> Path:
    """Directory holding the sample JSON sources."""
    return write_sources(tmp_path / "data")


@pytest.fixture
def make_data_dir(tmp_path: Path) -> Callable[..., Path]:
    """Factory for data directories with custom documents."""
    counter = {"n": 0}

    def factory(**documents: Any) -> Path:
        counter["n"] += 1
        return write_sources(tmp_path / f"data{counter['n']}", **documents)

    return factory


# =============================================================================
# HTTP FIXTURES
# =============================================================================


@pytest.fixture
async def client() -> AsyncGenerator[AsyncClient, None]:
    """Create test client."""
    from api.main import app

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
