"""
HSR Tools Seed Data Module.

Compiled-in lookup rows and the TypedDict shapes of the bundled JSON
sources (characters.json, skills.json, optimal-builds.json).
"""

from database.seeds.data.common import (
    LookupData,
    CharacterData,
    SkillData,
    MainStatsData,
    BuildData,
    SKILL_FIELD_MAP,
    MAIN_STAT_FIELD_MAP,
)
from database.seeds.data.reference import ELEMENTS, PATHS

__all__ = [
    # Type definitions
    "LookupData",
    "CharacterData",
    "SkillData",
    "MainStatsData",
    "BuildData",
    # Field maps
    "SKILL_FIELD_MAP",
    "MAIN_STAT_FIELD_MAP",
    # Lookup rows
    "ELEMENTS",
    "PATHS",
]
