"""
Tests for reading the JSON seed sources.

Run with: pytest tests/test_loader.py -v
"""

import pytest

from database.seeds.loader import (
    BUILDS_FILE,
    CHARACTERS_FILE,
    SKILLS_FILE,
    load_json_source,
)
from shared.config import DEFAULT_SEED_DATA_PATH
from shared.errors import ErrorCategory, SeedingError


async def test_loads_list_and_maps(data_dir):
    characters = load_json_source(data_dir, CHARACTERS_FILE, "characters", list)
    skills = load_json_source(data_dir, SKILLS_FILE, "skills", dict)
    builds = load_json_source(data_dir, BUILDS_FILE, "builds", dict)

    assert [c["id"] for c in characters] == ["seele", "march7th", "ghost"]
    assert set(skills) == {"seele", "march7th", "ghost"}
    assert builds["seele"]["sets"][0] == "Genius of Brilliant Stars"


async def test_missing_file_is_fatal(tmp_path):
    with pytest.raises(SeedingError) as exc_info:
        load_json_source(tmp_path, CHARACTERS_FILE, "characters", list)

    assert exc_info.value.stage == "characters"
    assert "failed to read characters.json" in str(exc_info.value)
    assert exc_info.value.category == ErrorCategory.SEED_DATA_ERROR


async def test_invalid_json_is_fatal(tmp_path):
    (tmp_path / SKILLS_FILE).write_text("{not json", encoding="utf-8")

    with pytest.raises(SeedingError) as exc_info:
        load_json_source(tmp_path, SKILLS_FILE, "skills", dict)

    assert exc_info.value.stage == "skills"
    assert "failed to parse skills.json" in str(exc_info.value)


async def test_wrong_top_level_shape_is_fatal(tmp_path):
    (tmp_path / BUILDS_FILE).write_text("[]", encoding="utf-8")

    with pytest.raises(SeedingError) as exc_info:
        load_json_source(tmp_path, BUILDS_FILE, "builds", dict)

    assert exc_info.value.stage == "builds"
    assert "must contain a JSON object" in str(exc_info.value)


async def test_bundled_sources_are_well_formed():
    characters = load_json_source(DEFAULT_SEED_DATA_PATH, CHARACTERS_FILE, "characters", list)
    skills = load_json_source(DEFAULT_SEED_DATA_PATH, SKILLS_FILE, "skills", dict)
    builds = load_json_source(DEFAULT_SEED_DATA_PATH, BUILDS_FILE, "builds", dict)

    ids = {c["id"] for c in characters}
    assert len(ids) == len(characters)
    assert len({c["charId"] for c in characters}) == len(characters)
    assert set(builds) <= ids
    assert "seele" in skills
