"""
HSR Tools Seed Data - Common Types.

TypedDict shapes of the bundled JSON sources and of the compiled-in
lookup rows. Keys mirror the JSON field names exactly.
"""

from typing import TypedDict, NotRequired


# =============================================================================
# Lookup rows (compiled-in)
# =============================================================================

class LookupData(TypedDict):
    """Element or path lookup row."""
    name: str
    icon_url: str


# =============================================================================
# JSON sources
# =============================================================================

class CharacterData(TypedDict):
    """One entry of characters.json."""
    id: str
    charId: str
    name: str
    path: str  # path name, resolved to paths.id
    element: str  # element name, resolved to elements.id
    rarity: int
    baseSpeed: int
    releaseOrder: int


class SkillData(TypedDict):
    """One value of skills.json (keyed by character id)."""
    basicMultiplier: NotRequired[float]
    skillMultiplier: NotRequired[float]
    ultMultiplier: NotRequired[float]
    basicEnergy: NotRequired[int]
    skillEnergy: NotRequired[int]
    ultCost: NotRequired[int]
    ultType: NotRequired[str]
    passive: NotRequired[str]
    baseAtk: NotRequired[int]
    baseCritRate: NotRequired[float]
    baseCritDmg: NotRequired[float]


class MainStatsData(TypedDict):
    """Recommended main stat per relic slot."""
    body: NotRequired[str]
    feet: NotRequired[str]
    orb: NotRequired[str]
    rope: NotRequired[str]


class BuildData(TypedDict):
    """One value of optimal-builds.json (keyed by character id)."""
    name: NotRequired[str]
    substats: NotRequired[dict[str, float]]
    mainStats: NotRequired[MainStatsData]
    sets: NotRequired[list[str]]


# JSON key -> CharacterSkill column
SKILL_FIELD_MAP: dict[str, str] = {
    "basicMultiplier": "basic_multiplier",
    "skillMultiplier": "skill_multiplier",
    "ultMultiplier": "ult_multiplier",
    "basicEnergy": "basic_energy",
    "skillEnergy": "skill_energy",
    "ultCost": "ult_cost",
    "ultType": "ult_type",
    "passive": "passive",
    "baseAtk": "base_atk",
    "baseCritRate": "base_crit_rate",
    "baseCritDmg": "base_crit_dmg",
}

# mainStats key -> CharacterBuild column
MAIN_STAT_FIELD_MAP: dict[str, str] = {
    "body": "body_main",
    "feet": "feet_main",
    "orb": "orb_main",
    "rope": "rope_main",
}
