"""
HSR Tools Seeders Module.

Reusable seeding logic separated from data definitions.
"""

from database.seeds.seeders.base import BaseSeeder
from database.seeds.seeders.build import BuildSeeder
from database.seeds.seeders.character import CharacterSeeder
from database.seeds.seeders.reference import ReferenceSeeder
from database.seeds.seeders.skill import SkillSeeder

__all__ = [
    "BaseSeeder",
    "BuildSeeder",
    "CharacterSeeder",
    "ReferenceSeeder",
    "SkillSeeder",
]
