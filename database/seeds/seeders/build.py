"""
HSR Tools Build Seeder.

Seeds recommended builds from optimal-builds.json:
- CharacterBuild (main stat per relic slot)
- CharacterBuildSubstat (weight per substat)
- RelicSet (created on first mention, no type)
- CharacterBuildSet (priority = 1-based position in the source list)

Each row is its own unit of work: a failed substat or set is rolled back
and logged without undoing the build or its other children.
"""

import logging
from typing import Any

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from database.models import (
    Character,
    CharacterBuild,
    CharacterBuildSet,
    CharacterBuildSubstat,
    RelicSet,
)
from database.seeds.data.common import MAIN_STAT_FIELD_MAP, BuildData
from database.seeds.seeders.base import RECORD_ERRORS, BaseSeeder

logger = logging.getLogger(__name__)


def check_build_shape(record: BuildData) -> None:
    """Reject records whose containers have the wrong JSON type."""
    if not isinstance(record, dict):
        raise TypeError(f"build record must be an object, got {type(record).__name__}")
    if not isinstance(record.get("substats") or {}, dict):
        raise TypeError("substats must be an object")
    if not isinstance(record.get("sets") or [], list):
        raise TypeError("sets must be an array")


def main_stat_columns(record: BuildData) -> dict[str, Any]:
    """Map ``mainStats`` onto the four slot columns; missing slots become NULL."""
    main_stats = record.get("mainStats") or {}
    if not isinstance(main_stats, dict):
        raise TypeError(f"mainStats must be an object, got {type(main_stats).__name__}")
    return {column: main_stats.get(key) for key, column in MAIN_STAT_FIELD_MAP.items()}


class BuildSeeder(BaseSeeder):
    """Seeder for character builds and their substat/set children."""

    stage = "builds"

    def __init__(
        self,
        session: AsyncSession,
        missing_character_level: int = logging.DEBUG,
        prune_stale: bool = True,
    ):
        super().__init__(session)
        self.missing_character_level = missing_character_level
        self.prune_stale = prune_stale

    async def seed(self, builds: dict[str, BuildData]) -> int:
        """
        Upsert builds and their children for every existing character.

        Args:
            builds: Mapping of character id -> build record

        Returns:
            Number of characters whose build was attempted
        """
        self.reset_stats()

        count = 0
        for character_id, record in builds.items():
            try:
                if await self.session.get(Character, character_id) is None:
                    self.log_skipped(
                        "Build",
                        character_id,
                        "character not found",
                        level=self.missing_character_level,
                    )
                    continue

                check_build_shape(record)
                build, _ = await self.upsert(
                    CharacterBuild,
                    match={"character_id": character_id},
                    data=main_stat_columns(record),
                    entity_type="Build",
                    code=character_id,
                )
                build_id = build.id
                await self.session.commit()
            except RECORD_ERRORS as e:
                await self.discard_failed("Build", character_id, e)
                continue

            substats = record.get("substats") or {}
            set_names = record.get("sets") or []
            await self._seed_substats(build_id, character_id, substats)
            await self._seed_sets(build_id, character_id, set_names)
            if self.prune_stale:
                await self._prune_stale(build_id, character_id, substats, set_names)

            count += 1

        self.log_summary("Build")
        logger.info(f"   Seeded {count} character builds", extra={"stage": self.stage})
        return count

    async def _seed_substats(
        self,
        build_id: int,
        character_id: str,
        substats: dict[str, float],
    ) -> None:
        for stat_name, weight in substats.items():
            code = f"{character_id}:{stat_name}"
            try:
                await self.upsert(
                    CharacterBuildSubstat,
                    match={"build_id": build_id, "stat_name": stat_name},
                    data={"weight": float(weight)},
                    entity_type="Substat",
                    code=code,
                )
                await self.session.commit()
            except RECORD_ERRORS as e:
                await self.discard_failed("Substat", code, e)

    async def _relic_set_id(self, name: str) -> int:
        """Find or lazily create a relic set by name."""
        relic_set, _ = await self.get_or_create(
            RelicSet,
            {"name": name},
            entity_type="RelicSet",
            count_existing=False,
        )
        return relic_set.id

    async def _seed_sets(self, build_id: int, character_id: str, set_names: list[str]) -> None:
        for index, set_name in enumerate(set_names):
            code = f"{character_id}:{set_name}"
            try:
                relic_set_id = await self._relic_set_id(set_name)
                await self.upsert(
                    CharacterBuildSet,
                    match={"build_id": build_id, "relic_set_id": relic_set_id},
                    data={"priority": index + 1},
                    entity_type="BuildSet",
                    code=code,
                )
                await self.session.commit()
            except RECORD_ERRORS as e:
                await self.discard_failed("BuildSet", code, e)

    async def _prune_stale(
        self,
        build_id: int,
        character_id: str,
        substats: dict[str, float],
        set_names: list[str],
    ) -> None:
        """Delete child rows whose key no longer appears in the source record."""
        try:
            await self.session.execute(
                delete(CharacterBuildSubstat)
                .where(
                    CharacterBuildSubstat.build_id == build_id,
                    CharacterBuildSubstat.stat_name.not_in(list(substats)),
                )
                .execution_options(synchronize_session="fetch")
            )
            await self.session.execute(
                delete(CharacterBuildSet)
                .where(
                    CharacterBuildSet.build_id == build_id,
                    CharacterBuildSet.relic_set_id.not_in(
                        select(RelicSet.id).where(RelicSet.name.in_(list(set_names)))
                    ),
                )
                .execution_options(synchronize_session="fetch")
            )
            await self.session.commit()
        except RECORD_ERRORS as e:
            await self.discard_failed("BuildPrune", character_id, e)
