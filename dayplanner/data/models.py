"""
Day Planner - Data Models.

Events live only in memory for the current session. They are created
exclusively through the intake pipeline and never persisted.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping

# Closed label set the classifier is asked to pick from.
CATEGORIES: tuple[str, ...] = ("meeting", "exercise", "personal", "other")
DEFAULT_CATEGORY = "other"

# Filter sentinel: show every category.
ALL_CATEGORIES = "all"

CATEGORY_COLORS: dict[str, str] = {
    "meeting": "#4CAF50",
    "exercise": "#FFC107",
    "personal": "#03A9F4",
    "other": "#9E9E9E",
}

# Labels of the Korean /categorize service, same order and colors as above.
KO_CATEGORIES: tuple[str, ...] = ("회의", "운동", "개인 일", "기타")
KO_DEFAULT_CATEGORY = "기타"

KO_CATEGORY_COLORS: dict[str, str] = dict(zip(KO_CATEGORIES, CATEGORY_COLORS.values()))


@dataclass(frozen=True)
class CategoryTable:
    """The label set, colors and fallback label for one language."""

    labels: tuple[str, ...]
    colors: Mapping[str, str]
    default: str


CATEGORY_TABLES: dict[str, CategoryTable] = {
    "en": CategoryTable(CATEGORIES, CATEGORY_COLORS, DEFAULT_CATEGORY),
    "ko": CategoryTable(KO_CATEGORIES, KO_CATEGORY_COLORS, KO_DEFAULT_CATEGORY),
}


@dataclass(frozen=True)
class Event:
    """A single scheduled item on one calendar day.

    Frozen: every change produces a new Event via dataclasses.replace().
    """

    title: str
    time: str                 # "HH:MM", 24h
    category: str             # normally one of the active labels, any label accepted
    completed: bool = False


def color_for(
    category: str,
    colors: Mapping[str, str] = CATEGORY_COLORS,
    default: str = DEFAULT_CATEGORY,
) -> str:
    """Return the display color for a category, falling back to the default label's color."""
    if category in colors:
        return colors[category]
    return colors.get(default, CATEGORY_COLORS[DEFAULT_CATEGORY])
