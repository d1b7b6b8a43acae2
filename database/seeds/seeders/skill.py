"""
HSR Tools Skill Seeder.

Seeds one CharacterSkill row per character from skills.json. Entries
for characters that do not exist yet are expected (unreleased or not
yet listed) and skipped quietly.
"""

import logging
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from database.models import Character, CharacterSkill
from database.seeds.data.common import SKILL_FIELD_MAP, SkillData
from database.seeds.seeders.base import RECORD_ERRORS, BaseSeeder

logger = logging.getLogger(__name__)


def skill_columns(record: SkillData) -> dict[str, Any]:
    """
    Map a skill record onto CharacterSkill columns.

    Every column is assigned so a re-seed fully replaces the row; keys
    absent from the record take the column's storage default.
    """
    if not isinstance(record, dict):
        raise TypeError(f"skill record must be an object, got {type(record).__name__}")

    columns: dict[str, Any] = {}
    for key, column in SKILL_FIELD_MAP.items():
        if key in record:
            columns[column] = record[key]
        else:
            default = CharacterSkill.__table__.c[column].default
            columns[column] = default.arg if default is not None else None
    return columns


class SkillSeeder(BaseSeeder):
    """Seeder for the character_skills table."""

    stage = "skills"

    def __init__(self, session: AsyncSession, missing_character_level: int = logging.DEBUG):
        super().__init__(session)
        self.missing_character_level = missing_character_level

    async def seed(self, skills: dict[str, SkillData]) -> int:
        """
        Upsert the skill row of every existing character.

        Args:
            skills: Mapping of character id -> skill record

        Returns:
            Number of skill rows written
        """
        self.reset_stats()

        count = 0
        for character_id, record in skills.items():
            try:
                if await self.session.get(Character, character_id) is None:
                    self.log_skipped(
                        "Skill",
                        character_id,
                        "character not found",
                        level=self.missing_character_level,
                    )
                    continue

                await self.upsert(
                    CharacterSkill,
                    match={"character_id": character_id},
                    data=skill_columns(record),
                    entity_type="Skill",
                    code=character_id,
                )
                await self.session.commit()
            except RECORD_ERRORS as e:
                await self.discard_failed("Skill", character_id, e)
                continue

            count += 1

        self.log_summary("Skill")
        logger.info(f"   Seeded {count} character skills", extra={"stage": self.stage})
        return count
