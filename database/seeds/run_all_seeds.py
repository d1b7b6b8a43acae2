"""
HSR Tools - Run all seeds.

This script seeds the game data using the seeding architecture:
- data/: Bundled JSON sources and the compiled-in lookup rows
- seeders/: Reusable seeding logic, one class per table group
- pipeline.py: Stage ordering and the fatal-error contract

Commands:
- migrate: Create every table
- seed [data_path]: Create tables, then run the seed pipeline
- fresh [data_path]: Drop every table, recreate and seed

Run with: python -m database.seeds.run_all_seeds seed
"""

import argparse
import asyncio
import logging
import sys

from database.connection import close_db, drop_db, get_async_session, init_db
from database.seeds.pipeline import SeedPipeline, SeedReport
from shared.errors import SeedingError
from shared.logging_config import configure_logging

logger = logging.getLogger(__name__)


async def run_all_seeds(data_path: str | None = None) -> SeedReport:
    """
    Create missing tables and run the full seed pipeline.

    Args:
        data_path: Directory with the JSON sources (defaults to SEED_DATA_PATH)

    Returns:
        SeedReport with per-stage counts

    Raises:
        SeedingError: The run aborted; ``stage`` names where
    """
    logger.info("=" * 70)
    logger.info("HSR Tools Database Seeding")
    logger.info("=" * 70)

    await init_db()

    async with get_async_session() as session:
        report = await SeedPipeline(session, data_path).run()

    logger.info("=" * 70)
    logger.info("SEEDING SUMMARY")
    logger.info("=" * 70)
    for stage, count in report.as_dict().items():
        failed = report.failures.get(stage, 0)
        logger.info(f"  {stage}: {count} processed, {failed} failed")

    return report


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="python -m database.seeds.run_all_seeds",
        description="Create the schema and load HSR game data",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    commands.add_parser("migrate", help="create all tables")

    seed = commands.add_parser("seed", help="create tables and seed game data")
    seed.add_argument("data_path", nargs="?", default=None, help="directory with the JSON sources")

    fresh = commands.add_parser("fresh", help="drop all tables, recreate and seed")
    fresh.add_argument("data_path", nargs="?", default=None, help="directory with the JSON sources")

    return parser


async def main(argv: list[str] | None = None) -> int:
    """CLI entry point; returns the process exit code."""
    args = build_parser().parse_args(argv)
    configure_logging()

    try:
        if args.command == "migrate":
            await init_db()
            logger.info("Migrations completed")
        elif args.command == "seed":
            await run_all_seeds(args.data_path)
        elif args.command == "fresh":
            logger.warning("Dropping all tables")
            await drop_db()
            await run_all_seeds(args.data_path)
    except SeedingError as e:
        logger.error(f"Seeding failed: {e}", extra={"stage": e.stage})
        return 1
    finally:
        await close_db()

    logger.info("All seeds completed successfully!" if args.command != "migrate" else "Done")
    return 0


def cli() -> None:
    """Console-script entry point."""
    sys.exit(asyncio.run(main()))


if __name__ == "__main__":
    cli()
