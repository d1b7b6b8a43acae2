"""
HSR Tools Seed Data - Elements and Paths.

Fixed lookup rows seeded before any character. Names must match the
``element`` / ``path`` strings used in characters.json.
"""

from database.seeds.data.common import LookupData

ICON_BASE_URL = "https://raw.githubusercontent.com/Mar-7th/StarRailRes/master/icon"


ELEMENTS: list[LookupData] = [
    {"name": "Physical", "icon_url": f"{ICON_BASE_URL}/element/Physical.png"},
    {"name": "Fire", "icon_url": f"{ICON_BASE_URL}/element/Fire.png"},
    {"name": "Ice", "icon_url": f"{ICON_BASE_URL}/element/Ice.png"},
    # Lightning ships as "Thunder" upstream
    {"name": "Lightning", "icon_url": f"{ICON_BASE_URL}/element/Thunder.png"},
    {"name": "Wind", "icon_url": f"{ICON_BASE_URL}/element/Wind.png"},
    {"name": "Quantum", "icon_url": f"{ICON_BASE_URL}/element/Quantum.png"},
    {"name": "Imaginary", "icon_url": f"{ICON_BASE_URL}/element/Imaginary.png"},
]

PATHS: list[LookupData] = [
    {"name": "Destruction", "icon_url": f"{ICON_BASE_URL}/path/Destruction.png"},
    {"name": "The Hunt", "icon_url": f"{ICON_BASE_URL}/path/Hunt.png"},
    {"name": "Erudition", "icon_url": f"{ICON_BASE_URL}/path/Erudition.png"},
    {"name": "Harmony", "icon_url": f"{ICON_BASE_URL}/path/Harmony.png"},
    {"name": "Nihility", "icon_url": f"{ICON_BASE_URL}/path/Nihility.png"},
    {"name": "Preservation", "icon_url": f"{ICON_BASE_URL}/path/Preservation.png"},
    {"name": "Abundance", "icon_url": f"{ICON_BASE_URL}/path/Abundance.png"},
    {"name": "Remembrance", "icon_url": f"{ICON_BASE_URL}/path/Remembrance.png"},
]
