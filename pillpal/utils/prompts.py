"""
Centralized prompt loading with caching.
Loads prompts once from YAML and caches for performance.
"""

import yaml
from pathlib import Path
from functools import lru_cache
from typing import Any

PROMPTS_PATH = Path(__file__).parent.parent / "prompts.yaml"


@lru_cache(maxsize=1)
def load_prompts() -> dict:
    """
    Loads prompts from YAML configuration file with LRU cache.

    Returns:
        Dictionary containing all prompt configurations

    Raises:
        FileNotFoundError: If prompts.yaml is not found
    """
    with open(PROMPTS_PATH, "r", encoding="utf-8") as f:
        return yaml.safe_load(f)


def get_page_info(page_context: str) -> dict[str, Any]:
    """
    Label, description, input placeholder and starter suggestions for a page.

    Raises:
        KeyError: If the page has no entry in prompts.yaml
    """
    return load_prompts()["page_info"][page_context]
