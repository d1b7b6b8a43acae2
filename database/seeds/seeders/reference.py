"""
HSR Tools Reference Seeder.

Seeds the fixed lookup tables every later stage depends on:
- Elements
- Paths

Existing rows are left as found (first write wins). Any write failure
aborts the stage: lookup tables must be complete before characters can
be resolved.
"""

import logging

from sqlalchemy.exc import SQLAlchemyError

from database.models import Element, Path
from database.seeds.data.common import LookupData
from database.seeds.data.reference import ELEMENTS, PATHS
from database.seeds.seeders.base import BaseSeeder
from shared.errors import ErrorCategory, SeedingError

logger = logging.getLogger(__name__)


class ReferenceSeeder(BaseSeeder):
    """Seeder for the Element and Path lookup tables."""

    stage = "reference"

    async def seed(
        self,
        elements: list[LookupData] = ELEMENTS,
        paths: list[LookupData] = PATHS,
    ) -> tuple[int, int]:
        """
        Seed elements then paths.

        Returns:
            Tuple of (elements_processed, paths_processed)

        Raises:
            SeedingError: A lookup row could not be written
        """
        element_count = await self._seed_lookup(Element, elements, "elements", "Element")
        path_count = await self._seed_lookup(Path, paths, "paths", "Path")
        return element_count, path_count

    async def _seed_lookup(
        self,
        model_class: type,
        rows: list[LookupData],
        stage: str,
        entity_type: str,
    ) -> int:
        """Create-if-absent every row of one lookup table, all or nothing."""
        self.stage = stage
        self.reset_stats()

        try:
            for row in rows:
                await self.get_or_create(
                    model_class,
                    match={"name": row["name"]},
                    defaults={"icon_url": row["icon_url"]},
                    entity_type=entity_type,
                    code=row["name"],
                )
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            raise SeedingError(
                stage,
                f"failed to seed {entity_type.lower()}s: {e}",
                category=ErrorCategory.DATABASE_ERROR,
            ) from e

        self.log_summary(entity_type)
        logger.info(f"   Seeded {len(rows)} {stage}", extra={"stage": stage})
        return len(rows)
