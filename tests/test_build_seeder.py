"""
Tests for build seeding: main stats, substats, relic set priority and
stale-row pruning.

Run with: pytest tests/test_build_seeder.py -v
"""

import logging

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError

from database.models import (
    CharacterBuild,
    CharacterBuildSet,
    CharacterBuildSubstat,
    RelicSet,
)
from database.seeds.seeders import BuildSeeder, CharacterSeeder, ReferenceSeeder
from database.seeds.seeders.build import check_build_shape, main_stat_columns


@pytest.fixture
async def characters(db_session, sample_characters):
    await ReferenceSeeder(db_session).seed()
    await CharacterSeeder(db_session).seed(sample_characters)


async def _set_priorities(session, character_id: str) -> dict[str, int]:
    result = await session.execute(
        select(RelicSet.name, CharacterBuildSet.priority)
        .join(CharacterBuildSet, CharacterBuildSet.relic_set_id == RelicSet.id)
        .join(CharacterBuild, CharacterBuild.id == CharacterBuildSet.build_id)
        .where(CharacterBuild.character_id == character_id)
    )
    return {name: priority for name, priority in result.all()}


async def _substat_weights(session, character_id: str) -> dict[str, float]:
    result = await session.execute(
        select(CharacterBuildSubstat.stat_name, CharacterBuildSubstat.weight)
        .join(CharacterBuild, CharacterBuild.id == CharacterBuildSubstat.build_id)
        .where(CharacterBuild.character_id == character_id)
    )
    return {name: float(weight) for name, weight in result.all()}


async def test_main_stat_columns_maps_every_slot():
    assert main_stat_columns({"mainStats": {"body": "DEF%"}}) == {
        "body_main": "DEF%",
        "feet_main": None,
        "orb_main": None,
        "rope_main": None,
    }
    assert main_stat_columns({})["rope_main"] is None


async def test_check_build_shape_rejects_wrong_containers():
    with pytest.raises(TypeError):
        check_build_shape({"sets": "Musketeer"})
    with pytest.raises(TypeError):
        check_build_shape({"substats": ["SPD"]})
    with pytest.raises(TypeError):
        check_build_shape("not a record")
    check_build_shape({"substats": {}, "sets": []})


async def test_seeds_builds_with_children(db_session, characters, sample_builds):
    count = await BuildSeeder(db_session).seed(sample_builds)

    assert count == 2
    assert await db_session.scalar(select(func.count()).select_from(CharacterBuild)) == 2

    build = await db_session.scalar(
        select(CharacterBuild).where(CharacterBuild.character_id == "seele")
    )
    assert build.body_main == "CRIT Rate"
    assert build.orb_main == "Quantum DMG"

    assert await _substat_weights(db_session, "seele") == {
        "CRIT Rate": 1.0,
        "CRIT DMG": 1.0,
        "ATK%": 0.75,
    }
    assert await _set_priorities(db_session, "seele") == {
        "Genius of Brilliant Stars": 1,
        "Rutilant Arena": 2,
    }

    # Relic sets are created on first mention without a type
    relic_set = await db_session.scalar(select(RelicSet).where(RelicSet.name == "Rutilant Arena"))
    assert relic_set.type is None


async def test_orphan_build_is_skipped(db_session, characters, sample_builds):
    await BuildSeeder(db_session).seed(sample_builds)

    ghost = await db_session.scalar(
        select(CharacterBuild).where(CharacterBuild.character_id == "ghost")
    )
    assert ghost is None
    names = (await db_session.execute(select(CharacterBuildSubstat.stat_name))).scalars().all()
    assert "SPD" not in names


async def test_set_priority_follows_source_order(db_session, characters):
    await BuildSeeder(db_session).seed({"seele": {"sets": ["A", "B", "C"]}})
    assert await _set_priorities(db_session, "seele") == {"A": 1, "B": 2, "C": 3}

    await BuildSeeder(db_session).seed({"seele": {"sets": ["C", "A"]}})
    assert await _set_priorities(db_session, "seele") == {"C": 1, "A": 2}

    # The relic set itself survives even when no build references it
    assert await db_session.scalar(select(RelicSet).where(RelicSet.name == "B")) is not None


async def test_stale_rows_kept_when_pruning_disabled(db_session, characters):
    await BuildSeeder(db_session).seed(
        {"seele": {"substats": {"SPD": 1.0, "ATK%": 0.5}, "sets": ["A", "B", "C"]}}
    )
    await BuildSeeder(db_session, prune_stale=False).seed(
        {"seele": {"substats": {"SPD": 0.9}, "sets": ["C", "A"]}}
    )

    assert await _set_priorities(db_session, "seele") == {"C": 1, "A": 2, "B": 2}
    assert await _substat_weights(db_session, "seele") == {"SPD": 0.9, "ATK%": 0.5}


async def test_stale_substats_are_pruned(db_session, characters):
    await BuildSeeder(db_session).seed({"seele": {"substats": {"SPD": 1.0, "ATK%": 0.5}}})
    await BuildSeeder(db_session).seed({"seele": {"substats": {"SPD": 0.8}}})

    assert await _substat_weights(db_session, "seele") == {"SPD": 0.8}


async def test_reseed_is_idempotent(db_session, characters, sample_builds):
    await BuildSeeder(db_session).seed(sample_builds)
    await BuildSeeder(db_session).seed(sample_builds)

    assert await db_session.scalar(select(func.count()).select_from(CharacterBuild)) == 2
    assert await db_session.scalar(select(func.count()).select_from(CharacterBuildSubstat)) == 4
    assert await db_session.scalar(select(func.count()).select_from(CharacterBuildSet)) == 3
    assert await db_session.scalar(select(func.count()).select_from(RelicSet)) == 3


async def test_child_failure_keeps_build_and_siblings(db_session, characters, monkeypatch):
    seeder = BuildSeeder(db_session)
    original_upsert = seeder.upsert

    async def flaky_upsert(model_class, match, data, *args, **kwargs):
        if model_class is CharacterBuildSubstat and match.get("stat_name") == "CRIT DMG":
            raise SQLAlchemyError("simulated write failure")
        return await original_upsert(model_class, match, data, *args, **kwargs)

    monkeypatch.setattr(seeder, "upsert", flaky_upsert)

    count = await seeder.seed(
        {
            "seele": {
                "substats": {"CRIT Rate": 1.0, "CRIT DMG": 1.0, "SPD": 0.5},
                "mainStats": {"body": "CRIT Rate"},
                "sets": ["Genius of Brilliant Stars"],
            }
        }
    )

    assert count == 1
    assert seeder.stats["failed"] == 1
    assert await _substat_weights(db_session, "seele") == {"CRIT Rate": 1.0, "SPD": 0.5}
    assert await _set_priorities(db_session, "seele") == {"Genius of Brilliant Stars": 1}


async def test_malformed_build_fails_alone(db_session, characters):
    seeder = BuildSeeder(db_session)

    count = await seeder.seed(
        {
            "seele": {"sets": "Genius of Brilliant Stars"},
            "march7th": {"substats": {"DEF%": 1.0}, "sets": ["Knight of Purity Palace"]},
        }
    )

    assert count == 1
    assert seeder.stats["failed"] == 1
    assert await db_session.scalar(
        select(CharacterBuild).where(CharacterBuild.character_id == "seele")
    ) is None


async def test_set_failure_rolls_back_only_that_set(db_session, characters, monkeypatch, caplog):
    seeder = BuildSeeder(db_session)
    original_upsert = seeder.upsert

    async def flaky_upsert(model_class, match, data, *args, **kwargs):
        if model_class is CharacterBuildSet:
            relic_set = await db_session.get(RelicSet, match["relic_set_id"])
            if relic_set.name == "B":
                raise SQLAlchemyError("simulated write failure")
        return await original_upsert(model_class, match, data, *args, **kwargs)

    monkeypatch.setattr(seeder, "upsert", flaky_upsert)

    with caplog.at_level(logging.WARNING, logger="database.seeds.seeders.base"):
        count = await seeder.seed({"seele": {"sets": ["A", "B", "C"]}})

    assert count == 1
    assert seeder.stats["failed"] == 1
    # Remaining sets keep their source position
    assert await _set_priorities(db_session, "seele") == {"A": 1, "C": 3}
    # The relic set created in the failed unit is rolled back with it
    assert await db_session.scalar(select(RelicSet).where(RelicSet.name == "B")) is None

    failures = [r for r in caplog.records if r.levelno == logging.WARNING]
    assert len(failures) == 1
    assert "BuildSet seele:B: Failed to seed" in failures[0].getMessage()
