"""
HSR Tools - Database seeding.

Loads the bundled game data (characters, skills, optimal builds) into
the relational tables.
"""

from database.seeds.pipeline import PipelineStatus, SeedPipeline, SeedReport
from database.seeds.run_all_seeds import run_all_seeds

__all__ = [
    "PipelineStatus",
    "SeedPipeline",
    "SeedReport",
    "run_all_seeds",
]
