"""
Keyword-scored category assignment.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Tuple

from config.categories import DEFAULT_REGISTRY
from domain.category import CategoryConfig, CategoryRegistry

logger = logging.getLogger(__name__)


def score_categories(text: str, registry: CategoryRegistry = DEFAULT_REGISTRY) -> List[Tuple[str, int]]:
    """(category id, number of keywords found as substrings), in registry order."""
    haystack = (text or "").lower()
    return [
        (category.id, sum(1 for keyword in category.keywords if keyword.lower() in haystack))
        for category in registry.categories
    ]


def categorize(parts: Iterable[str], registry: CategoryRegistry = DEFAULT_REGISTRY) -> CategoryConfig:
    """
    Pick the category whose keyword list hits the text most often.

    Args:
        parts: Name, short intro, description and bullet texts
        registry: Categories to choose from

    Returns:
        Strictly highest count wins, ties keep the earlier category, no hits
        at all yield the registry default.
    """
    text = " ".join(p for p in parts if p)
    best_id, best_count = registry.default_id, 0

    for category_id, count in score_categories(text, registry):
        if count > best_count:
            best_id, best_count = category_id, count

    logger.debug("Category %s (%d keyword hits)", best_id, best_count)
    return registry.get(best_id)
