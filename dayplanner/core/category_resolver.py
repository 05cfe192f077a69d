"""
Day Planner - Category Resolver.

Asks the configured classifier for a category label. Classification is
never allowed to block event creation: any failure yields the default
category.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from dayplanner.data.models import DEFAULT_CATEGORY

if TYPE_CHECKING:
    from dayplanner.ports.classifier_port import CategoryClassifier

logger = logging.getLogger(__name__)


async def resolve_category(
    classifier: CategoryClassifier,
    text: str,
    default: str = DEFAULT_CATEGORY,
) -> str:
    """Return the classifier's label for text, or default on any failure."""
    try:
        category = await classifier.classify(text)
    except Exception as exc:
        logger.warning("Category classification failed for '%s': %s", text, exc)
        return default

    if not isinstance(category, str) or not category.strip():
        logger.warning("Classifier returned no usable label for '%s': %r", text, category)
        return default

    return category.strip()
