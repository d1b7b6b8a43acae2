"""
HSR Tools - Seed source loader.

Reads the bundled JSON documents. Any problem here (missing file,
unreadable file, invalid JSON, wrong top-level shape) is fatal for the
whole run and surfaces as a SeedingError naming the stage.
"""

import json
import logging
from pathlib import Path
from typing import Any

from shared.errors import SeedingError

logger = logging.getLogger(__name__)

CHARACTERS_FILE = "characters.json"
SKILLS_FILE = "skills.json"
BUILDS_FILE = "optimal-builds.json"


def load_json_source(
    data_path: str | Path,
    filename: str,
    stage: str,
    expected_type: type[list] | type[dict],
) -> Any:
    """
    Load and shape-check one JSON source file.

    Args:
        data_path: Directory containing the source files
        filename: File name inside ``data_path``
        stage: Pipeline stage name, used in the raised error
        expected_type: ``list`` for record sequences, ``dict`` for id-keyed maps

    Returns:
        The parsed document

    Raises:
        SeedingError: File missing/unreadable, invalid JSON or wrong shape
    """
    source = Path(data_path) / filename

    try:
        raw = source.read_text(encoding="utf-8")
    except OSError as e:
        raise SeedingError(stage, f"failed to read {filename}: {e}") from e

    try:
        document = json.loads(raw)
    except json.JSONDecodeError as e:
        raise SeedingError(stage, f"failed to parse {filename}: {e}") from e

    if not isinstance(document, expected_type):
        raise SeedingError(
            stage,
            f"{filename} must contain a JSON {'array' if expected_type is list else 'object'}, "
            f"got {type(document).__name__}",
        )

    logger.info(
        f"Loaded {len(document)} entries from {source}",
        extra={"stage": stage},
    )
    return document
