"""
HSR Tools - Seed pipeline.

Runs the four seeding stages in order against one explicitly provided
session:

1. Reference (elements, paths)
2. Characters (characters.json)
3. Skills (skills.json)
4. Builds (optimal-builds.json)

The run either completes with per-stage counts or aborts on the first
fatal error (unreadable source, reference write failure).
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from database.seeds.loader import (
    BUILDS_FILE,
    CHARACTERS_FILE,
    SKILLS_FILE,
    load_json_source,
)
from database.seeds.seeders import (
    BuildSeeder,
    CharacterSeeder,
    ReferenceSeeder,
    SkillSeeder,
)
from shared.config import get_settings
from shared.errors import ErrorCategory, SeedingError
from shared.logging_config import parse_level

logger = logging.getLogger(__name__)


class PipelineStatus(str, Enum):
    """Lifecycle of a single pipeline run."""
    NOT_RUN = "not_run"
    RUNNING = "running"
    COMPLETED = "completed"
    ABORTED = "aborted"


@dataclass
class SeedReport:
    """Rows processed per stage."""
    elements: int = 0
    paths: int = 0
    characters: int = 0
    skills: int = 0
    builds: int = 0
    failures: dict[str, int] = field(default_factory=dict)

    def as_dict(self) -> dict[str, int]:
        return {
            "elements": self.elements,
            "paths": self.paths,
            "characters": self.characters,
            "skills": self.skills,
            "builds": self.builds,
        }


class SeedPipeline:
    """
    One-shot batch seeding of the reference and character tables.

    Usage:
        async with get_async_session() as session:
            report = await SeedPipeline(session, data_path).run()
    """

    def __init__(
        self,
        session: AsyncSession,
        data_path: str | Path | None = None,
        *,
        prune_stale: bool | None = None,
        missing_character_level: int | None = None,
        unknown_reference_level: int | None = None,
    ):
        settings = get_settings()
        self.session = session
        self.data_path = Path(data_path or settings.SEED_DATA_PATH)
        self.prune_stale = (
            settings.SEED_PRUNE_STALE_BUILD_ROWS if prune_stale is None else prune_stale
        )
        self.missing_character_level = (
            parse_level(settings.SEED_MISSING_CHARACTER_LOG_LEVEL)
            if missing_character_level is None
            else missing_character_level
        )
        self.unknown_reference_level = (
            parse_level(settings.SEED_UNKNOWN_REFERENCE_LOG_LEVEL)
            if unknown_reference_level is None
            else unknown_reference_level
        )
        self.status = PipelineStatus.NOT_RUN
        self.current_stage = "elements"
        self.report = SeedReport()

    async def run(self) -> SeedReport:
        """
        Execute every stage in order.

        Returns:
            SeedReport with the per-stage counts

        Raises:
            SeedingError: First fatal error; ``stage`` names where it happened
        """
        self.status = PipelineStatus.RUNNING
        self.report = SeedReport()
        logger.info(f"Starting database seeding from {self.data_path}")

        try:
            await self._seed_reference()
            await self._seed_characters()
            await self._seed_skills()
            await self._seed_builds()
        except SQLAlchemyError as e:
            self.status = PipelineStatus.ABORTED
            await self.session.rollback()
            logger.error(f"Seeding aborted by storage error: {e}", extra={"stage": self.current_stage})
            raise SeedingError(
                self.current_stage,
                f"storage error: {e}",
                category=ErrorCategory.DATABASE_ERROR,
            ) from e
        except SeedingError as e:
            self.status = PipelineStatus.ABORTED
            logger.error(f"Seeding aborted: {e}", extra={"stage": e.stage})
            raise

        self.status = PipelineStatus.COMPLETED
        logger.info(f"Database seeding completed: {self.report.as_dict()}")
        return self.report

    async def _seed_reference(self) -> None:
        self.current_stage = "elements"
        logger.info("[STEP 1] Seeding elements and paths...")
        seeder = ReferenceSeeder(self.session)
        self.report.elements, self.report.paths = await seeder.seed()

    async def _seed_characters(self) -> None:
        self.current_stage = "characters"
        logger.info("[STEP 2] Seeding characters...")
        characters = load_json_source(self.data_path, CHARACTERS_FILE, "characters", list)
        seeder = CharacterSeeder(self.session, unknown_reference_level=self.unknown_reference_level)
        self.report.characters = await seeder.seed(characters)
        self.report.failures["characters"] = seeder.stats["failed"]

    async def _seed_skills(self) -> None:
        self.current_stage = "skills"
        logger.info("[STEP 3] Seeding character skills...")
        skills = load_json_source(self.data_path, SKILLS_FILE, "skills", dict)
        seeder = SkillSeeder(self.session, missing_character_level=self.missing_character_level)
        self.report.skills = await seeder.seed(skills)
        self.report.failures["skills"] = seeder.stats["failed"]

    async def _seed_builds(self) -> None:
        self.current_stage = "builds"
        logger.info("[STEP 4] Seeding character builds...")
        builds = load_json_source(self.data_path, BUILDS_FILE, "builds", dict)
        seeder = BuildSeeder(
            self.session,
            missing_character_level=self.missing_character_level,
            prune_stale=self.prune_stale,
        )
        self.report.builds = await seeder.seed(builds)
        self.report.failures["builds"] = seeder.stats["failed"]
