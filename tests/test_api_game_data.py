"""
Tests for the public game data endpoints.

Run with: pytest tests/test_api_game_data.py -v
"""

import logging
from datetime import datetime, timedelta, UTC

import pytest

from database.models import Banner, BannerCharacter, Code, Event
from database.seeds import SeedPipeline


@pytest.fixture
async def seeded(db_session, data_dir):
    await SeedPipeline(db_session, data_dir).run()


@pytest.fixture
async def live_content(db_session, seeded):
    """One current and one past row for banners, codes and events."""
    now = datetime.now(UTC)

    current = Banner(
        name="Butterfly on Swordtip",
        type="character",
        start_date=now - timedelta(days=3),
        end_date=now + timedelta(days=10),
    )
    current.characters.append(BannerCharacter(character_id="seele", is_featured=True))
    past = Banner(
        name="Nessun Dorma",
        type="character",
        start_date=now - timedelta(days=60),
        end_date=now - timedelta(days=40),
    )
    db_session.add_all([current, past])

    db_session.add_all([
        Code(code="STARRAILGIFT", rewards="50 Stellar Jade", is_active=True, created_at=now),
        Code(code="EXPIRED123", is_active=False, created_at=now - timedelta(days=30)),
    ])
    db_session.add_all([
        Event(name="Aetherium Wars", start_date=now - timedelta(days=1), end_date=now + timedelta(days=5)),
        Event(name="Future Fest", start_date=now + timedelta(days=7), end_date=now + timedelta(days=14)),
    ])
    await db_session.commit()


# =============================================================================
# Characters
# =============================================================================


async def test_character_list_flattens_element_and_path(client, seeded):
    response = await client.get("/api/characters")

    assert response.status_code == 200
    body = response.json()
    # Newest release first by default
    assert [c["id"] for c in body] == ["seele", "march7th"]
    assert body[0] == {
        "id": "seele",
        "charId": "1102",
        "name": "Seele",
        "element": "Quantum",
        "path": "The Hunt",
        "rarity": 5,
        "baseSpeed": 115,
        "releaseOrder": 1,
    }


async def test_character_list_filters(client, seeded):
    by_element = await client.get("/api/characters", params={"element": "Ice"})
    by_path = await client.get("/api/characters", params={"path": "The Hunt"})
    by_rarity = await client.get("/api/characters", params={"rarity": 4})
    nothing = await client.get("/api/characters", params={"element": "Quantum", "path": "Preservation"})

    assert [c["id"] for c in by_element.json()] == ["march7th"]
    assert [c["id"] for c in by_path.json()] == ["seele"]
    assert [c["id"] for c in by_rarity.json()] == ["march7th"]
    assert nothing.json() == []


async def test_character_list_sorting(client, seeded):
    by_speed = await client.get("/api/characters", params={"sort": "base_speed", "order": "asc"})
    by_name = await client.get("/api/characters", params={"sort": "name", "order": "desc"})

    assert [c["id"] for c in by_speed.json()] == ["march7th", "seele"]
    assert [c["id"] for c in by_name.json()] == ["seele", "march7th"]


@pytest.mark.parametrize(
    "params",
    [{"sort": "password"}, {"order": "sideways"}, {"rarity": 3}],
)
async def test_character_list_rejects_bad_query(client, seeded, params):
    response = await client.get("/api/characters", params=params)

    assert response.status_code == 422


async def test_character_detail_includes_skills_and_build(client, seeded):
    response = await client.get("/api/characters/seele")

    assert response.status_code == 200
    body = response.json()
    assert body["element"]["name"] == "Quantum"
    assert body["path"]["name"] == "The Hunt"

    assert body["skills"]["skillMultiplier"] == pytest.approx(2.2)
    assert body["skills"]["ultType"] == "single"

    build = body["build"]
    assert build["bodyMain"] == "CRIT Rate"
    assert build["orbMain"] == "Quantum DMG"
    # Substats by descending weight
    assert [s["statName"] for s in build["substats"]][-1] == "ATK%"
    assert {s["statName"] for s in build["substats"][:2]} == {"CRIT Rate", "CRIT DMG"}
    # Relic sets by priority
    assert [s["relicSet"]["name"] for s in build["sets"]] == [
        "Genius of Brilliant Stars",
        "Rutilant Arena",
    ]
    assert [s["priority"] for s in build["sets"]] == [1, 2]


async def test_character_detail_without_build(client, make_data_dir, db_session):
    await SeedPipeline(db_session, make_data_dir(skills={}, builds={})).run()

    response = await client.get("/api/characters/march7th")

    assert response.status_code == 200
    assert response.json()["skills"] is None
    assert response.json()["build"] is None


async def test_unknown_character_is_404(client, seeded):
    response = await client.get("/api/characters/ghost")

    assert response.status_code == 404
    assert response.json()["message"] == "Character not found"


# =============================================================================
# Banners / Codes / Events
# =============================================================================


async def test_banners_default_to_active(client, live_content):
    active = await client.get("/api/banners")
    everything = await client.get("/api/banners", params={"active": "false"})

    assert [b["name"] for b in active.json()] == ["Butterfly on Swordtip"]
    assert [b["name"] for b in everything.json()] == ["Butterfly on Swordtip", "Nessun Dorma"]

    featured = active.json()[0]["characters"][0]
    assert featured["isFeatured"] is True
    assert featured["character"]["name"] == "Seele"


async def test_codes_active_and_all(client, live_content):
    active = await client.get("/api/codes")
    everything = await client.get("/api/codes", params={"all": "true"})

    assert [c["code"] for c in active.json()] == ["STARRAILGIFT"]
    assert active.json()[0]["rewards"] == "50 Stellar Jade"
    assert [c["code"] for c in everything.json()] == ["STARRAILGIFT", "EXPIRED123"]


async def test_events_current_and_all(client, live_content):
    current = await client.get("/api/events")
    everything = await client.get("/api/events", params={"all": "true"})

    assert [e["name"] for e in current.json()] == ["Aetherium Wars"]
    assert [e["name"] for e in everything.json()] == ["Future Fest", "Aetherium Wars"]


async def test_empty_tables_return_empty_lists(client):
    for url in ("/api/characters", "/api/banners", "/api/codes", "/api/events"):
        response = await client.get(url)
        assert response.status_code == 200
        assert response.json() == []


# =============================================================================
# Health
# =============================================================================


async def test_health_reports_database(client):
    for url in ("/health", "/api/health"):
        response = await client.get(url)
        assert response.status_code == 200
        assert response.json()["database"] == "connected"


async def test_root(client):
    response = await client.get("/")

    assert response.status_code == 200
    assert response.json()["health"] == "/health"


async def test_startup_seed_failure_keeps_api_serving(client, monkeypatch, tmp_path, caplog):
    from api import main

    monkeypatch.setattr(main.settings, "SEED_ON_STARTUP", True)
    monkeypatch.setattr(main.settings, "SEED_DATA_PATH", str(tmp_path / "missing"))

    with caplog.at_level(logging.ERROR, logger="api.main"):
        await main.startup_event()

    assert "Failed to seed data" in caplog.text
    response = await client.get("/health")
    assert response.status_code == 200
    assert response.json()["database"] == "connected"
