"""
HSR Tools Character Seeder.

Seeds characters from characters.json:
- Resolves element/path names against the lookup tables (one query each)
- Upserts each character by its external id with full-replace semantics

Records naming an unknown element or path are skipped with a warning;
a failed write skips only that record.
"""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from database.models import Character, Element, Path
from database.seeds.data.common import CharacterData
from database.seeds.seeders.base import RECORD_ERRORS, BaseSeeder

logger = logging.getLogger(__name__)


class CharacterSeeder(BaseSeeder):
    """Seeder for the characters table."""

    stage = "characters"

    def __init__(self, session: AsyncSession, unknown_reference_level: int = logging.WARNING):
        super().__init__(session)
        self.unknown_reference_level = unknown_reference_level

    async def _name_to_id(self, model_class: type) -> dict[str, int]:
        result = await self.session.execute(select(model_class.name, model_class.id))
        return {name: row_id for name, row_id in result.all()}

    async def seed(self, characters: list[CharacterData]) -> int:
        """
        Upsert every character whose element and path resolve.

        Args:
            characters: Records loaded from characters.json

        Returns:
            Number of characters written
        """
        self.reset_stats()
        element_ids = await self._name_to_id(Element)
        path_ids = await self._name_to_id(Path)

        count = 0
        for record in characters:
            code = str(record.get("id", "?")) if isinstance(record, dict) else "?"
            try:
                element_id = element_ids.get(record["element"])
                if element_id is None:
                    self.log_skipped(
                        "Character",
                        code,
                        f"unknown element '{record['element']}' for '{record.get('name')}'",
                        level=self.unknown_reference_level,
                    )
                    continue

                path_id = path_ids.get(record["path"])
                if path_id is None:
                    self.log_skipped(
                        "Character",
                        code,
                        f"unknown path '{record['path']}' for '{record.get('name')}'",
                        level=self.unknown_reference_level,
                    )
                    continue

                await self.upsert(
                    Character,
                    match={"id": record["id"]},
                    data={
                        "char_id": record["charId"],
                        "name": record["name"],
                        "element_id": element_id,
                        "path_id": path_id,
                        "rarity": int(record["rarity"]),
                        "base_speed": int(record["baseSpeed"]),
                        "release_order": int(record["releaseOrder"]),
                    },
                    entity_type="Character",
                    code=code,
                )
                await self.session.commit()
            except RECORD_ERRORS as e:
                await self.discard_failed("Character", code, e)
                continue

            count += 1

        self.log_summary("Character")
        logger.info(f"   Seeded {count} characters", extra={"stage": self.stage})
        return count
