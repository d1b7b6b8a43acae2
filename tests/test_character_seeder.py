"""
Tests for character seeding: reference resolution, full replace and skips.

Run with: pytest tests/test_character_seeder.py -v
"""

import logging

import pytest
from sqlalchemy import func, select

from database.models import Character, Element, Path
from database.seeds.seeders import CharacterSeeder, ReferenceSeeder


@pytest.fixture
async def reference(db_session):
    await ReferenceSeeder(db_session).seed()


async def test_seeds_valid_characters_and_skips_unknown_path(
    db_session, reference, sample_characters, caplog
):
    with caplog.at_level(logging.WARNING, logger="database.seeds.seeders.base"):
        count = await CharacterSeeder(db_session).seed(sample_characters)

    assert count == 2
    assert await db_session.scalar(select(func.count()).select_from(Character)) == 2
    assert await db_session.get(Character, "ghost") is None

    skipped = [r for r in caplog.records if "ghost" in r.getMessage()]
    assert len(skipped) == 1
    assert skipped[0].levelno == logging.WARNING
    assert "unknown path 'Unknown Path'" in skipped[0].getMessage()


async def test_resolves_element_and_path_ids(db_session, reference, sample_characters):
    await CharacterSeeder(db_session).seed(sample_characters)

    seele = await db_session.get(Character, "seele")
    quantum = await db_session.scalar(select(Element).where(Element.name == "Quantum"))
    hunt = await db_session.scalar(select(Path).where(Path.name == "The Hunt"))

    assert seele.element_id == quantum.id
    assert seele.path_id == hunt.id
    assert seele.char_id == "1102"
    assert (seele.rarity, seele.base_speed, seele.release_order) == (5, 115, 1)


async def test_reseed_replaces_changed_fields(db_session, reference, sample_characters):
    await CharacterSeeder(db_session).seed(sample_characters)

    sample_characters[1]["rarity"] = 5
    sample_characters[1]["element"] = "Fire"
    await CharacterSeeder(db_session).seed(sample_characters)

    rows = (
        await db_session.execute(select(Character).where(Character.id == "march7th"))
    ).scalars().all()
    assert len(rows) == 1
    await db_session.refresh(rows[0])
    assert rows[0].rarity == 5
    fire = await db_session.scalar(select(Element).where(Element.name == "Fire"))
    assert rows[0].element_id == fire.id


async def test_unknown_element_skip_level_is_configurable(
    db_session, reference, sample_characters, caplog
):
    records = [dict(sample_characters[0], id="x", charId="x1", element="Void")]

    with caplog.at_level(logging.DEBUG, logger="database.seeds.seeders.base"):
        count = await CharacterSeeder(db_session, unknown_reference_level=logging.INFO).seed(records)

    assert count == 0
    skipped = [r for r in caplog.records if "unknown element 'Void'" in r.getMessage()]
    assert skipped and skipped[0].levelno == logging.INFO


async def test_malformed_record_is_skipped_and_run_continues(db_session, reference, sample_characters):
    records = [
        {"id": "broken", "name": "Broken"},  # no element/path keys
        sample_characters[0],
    ]
    seeder = CharacterSeeder(db_session)

    count = await seeder.seed(records)

    assert count == 1
    assert seeder.stats["failed"] == 1
    assert await db_session.get(Character, "seele") is not None


async def test_duplicate_char_id_fails_only_that_record(db_session, reference, sample_characters):
    records = [
        sample_characters[0],
        dict(sample_characters[1], charId=sample_characters[0]["charId"]),
    ]
    seeder = CharacterSeeder(db_session)

    count = await seeder.seed(records)

    assert count == 1
    assert seeder.stats["failed"] == 1
    assert await db_session.get(Character, "seele") is not None
    assert await db_session.get(Character, "march7th") is None
