"""
HSR Tools Base Seeder.

Provides common functionality for all seeders:
- Uniform logging format
- Generic upsert (full replace) and get-or-create (first write wins)
- Per-record unit of work with rollback on failure
- Statistics tracking
"""

import logging
from typing import Any

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

logger = logging.getLogger(__name__)

# Failures absorbed per record: storage errors plus malformed source records
RECORD_ERRORS = (SQLAlchemyError, KeyError, TypeError, ValueError)


class BaseSeeder:
    """
    Base class for all seeders with common functionality.

    Provides:
    - Consistent logging format
    - Statistics tracking (created, updated, skipped, failed)
    - Generic upsert operation keyed by arbitrary unique columns
    """

    stage = "seed"

    def __init__(self, session: AsyncSession):
        """
        Initialize the seeder.

        Args:
            session: The async database session shared by every stage
        """
        self.session = session
        self.stats = {
            "created": 0,
            "updated": 0,
            "skipped": 0,
            "failed": 0,
        }

    def reset_stats(self) -> None:
        """Reset statistics counters."""
        self.stats = {"created": 0, "updated": 0, "skipped": 0, "failed": 0}

    def _extra(self, **fields: Any) -> dict[str, Any]:
        return {"stage": self.stage, **fields}

    def log_created(self, entity_type: str, code: str) -> None:
        """Log a created entity."""
        self.stats["created"] += 1
        logger.debug(f"  + {entity_type} {code}: Created", extra=self._extra(entity_type=entity_type))

    def log_updated(self, entity_type: str, code: str) -> None:
        """Log an updated entity."""
        self.stats["updated"] += 1
        logger.debug(f"  ~ {entity_type} {code}: Updated", extra=self._extra(entity_type=entity_type))

    def log_skipped(
        self,
        entity_type: str,
        code: str,
        reason: str | None = None,
        level: int = logging.DEBUG,
    ) -> None:
        """Log a skipped entity at the requested level."""
        self.stats["skipped"] += 1
        message = f"  - {entity_type} {code}: Skipped"
        if reason:
            message = f"{message} ({reason})"
        logger.log(level, message, extra=self._extra(entity_type=entity_type))

    def log_failed(self, entity_type: str, code: str, error: Exception) -> None:
        """Log a record-level failure; the run continues."""
        self.stats["failed"] += 1
        logger.warning(
            f"  ! {entity_type} {code}: Failed to seed: {error}",
            extra=self._extra(entity_type=entity_type),
        )

    def log_summary(self, entity_type: str) -> None:
        """Log a summary of operations."""
        logger.info(
            f"  {entity_type}: {self.stats['created']} created, "
            f"{self.stats['updated']} updated, {self.stats['skipped']} skipped, "
            f"{self.stats['failed']} failed",
            extra=self._extra(entity_type=entity_type),
        )

    async def find_one(self, model_class: type, match: dict[str, Any]) -> Any | None:
        """Return the row whose columns equal every value in ``match``, if any."""
        conditions = [getattr(model_class, key) == value for key, value in match.items()]
        result = await self.session.execute(select(model_class).where(*conditions))
        return result.scalar_one_or_none()

    async def upsert(
        self,
        model_class: type,
        match: dict[str, Any],
        data: dict[str, Any],
        entity_type: str = "Entity",
        code: str | None = None,
    ) -> tuple[Any, str]:
        """
        Generic full-replace upsert.

        Finds the row by its unique ``match`` columns; when present every
        field in ``data`` is reassigned, otherwise a new row is created from
        ``match`` and ``data`` together.

        Args:
            model_class: The SQLAlchemy model class
            match: Unique-key columns identifying the row
            data: Replacement values for every other field
            entity_type: Name for logging (e.g., "Character", "Substat")
            code: Identifier for logging

        Returns:
            Tuple of (instance, action) where action is "created" or "updated"
        """
        log_code = code or ":".join(str(value) for value in match.values())

        existing = await self.find_one(model_class, match)

        if existing is not None:
            for key, value in data.items():
                setattr(existing, key, value)
            await self.session.flush()
            self.log_updated(entity_type, log_code)
            return existing, "updated"

        instance = model_class(**match, **data)
        self.session.add(instance)
        await self.session.flush()
        self.log_created(entity_type, log_code)
        return instance, "created"

    async def get_or_create(
        self,
        model_class: type,
        match: dict[str, Any],
        defaults: dict[str, Any] | None = None,
        entity_type: str = "Entity",
        code: str | None = None,
        count_existing: bool = True,
    ) -> tuple[Any, str]:
        """
        Create a row only if none matches; an existing row is left as found.

        Args:
            count_existing: Log and count a found row as skipped. Lookups
                that merely resolve a reference pass False.

        Returns:
            Tuple of (instance, action) where action is "created", "skipped"
            or "found" (existing row, not counted)
        """
        log_code = code or ":".join(str(value) for value in match.values())

        existing = await self.find_one(model_class, match)
        if existing is not None:
            if not count_existing:
                return existing, "found"
            self.log_skipped(entity_type, log_code, "already exists")
            return existing, "skipped"

        instance = model_class(**match, **(defaults or {}))
        self.session.add(instance)
        await self.session.flush()
        self.log_created(entity_type, log_code)
        return instance, "created"

    async def discard_failed(self, entity_type: str, code: str, error: Exception) -> None:
        """Roll back the failed unit of work and record the failure."""
        await self.session.rollback()
        self.log_failed(entity_type, code, error)
