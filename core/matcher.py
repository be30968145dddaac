# core/matcher.py
import logging
from pathlib import Path
from typing import List, Union

from .errors import ResourceLoadError

logger = logging.getLogger(__name__)


def read_terms(path: Union[str, Path]) -> List[str]:
    """
    Reads a newline-delimited term file into lowercase, trimmed, non-empty terms.
    Raises ResourceLoadError when the file is missing or unreadable.
    """
    try:
        text = Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ResourceLoadError(f"Could not read term list {path}: {e}") from e
    terms = [line.strip().lower() for line in text.split("\n")]
    return [t for t in terms if t]


def load_unhealthy_ingredients(path: Union[str, Path]) -> List[str]:
    """
    Loads the curated unhealthy term list. A missing or broken file
    degrades to an empty list so the analysis still goes through.
    """
    try:
        return read_terms(path)
    except ResourceLoadError as e:
        logger.warning("Error loading unhealthy ingredients: %s", e)
        return []


def check_unhealthy_ingredients(ingredients: str, unhealthy_list: List[str]) -> List[str]:
    # Plain substring containment: "oil" also matches "boiler".
    ingredients_lower = (ingredients or "").lower()
    return [item for item in unhealthy_list if item.lower() in ingredients_lower]
