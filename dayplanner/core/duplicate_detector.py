"""
Day Planner - Duplicate Detector.

Flags a new event whose title is nearly identical to one already planned
on the same day. The check is advisory: callers decide what to do with it.
"""

from __future__ import annotations

import logging
import re
from collections import Counter
from typing import Iterable

from dayplanner.data.models import Event

logger = logging.getLogger(__name__)

DEFAULT_THRESHOLD = 0.8

_WHITESPACE = re.compile(r"\s+")


def _bigrams(text: str) -> Counter[str]:
    return Counter(text[i:i + 2] for i in range(len(text) - 1))


def compare_two_strings(first: str, second: str) -> float:
    """Dice coefficient over character bigrams, whitespace ignored.

    Returns 1.0 for identical strings (including two empty ones) and 0.0
    when either string has fewer than two characters.
    """
    first = _WHITESPACE.sub("", first)
    second = _WHITESPACE.sub("", second)

    if first == second:
        return 1.0
    if len(first) < 2 or len(second) < 2:
        return 0.0

    shared = sum((_bigrams(first) & _bigrams(second)).values())
    return (2.0 * shared) / (len(first) + len(second) - 2)


def find_similar(
    candidate_title: str,
    existing_events: Iterable[Event],
    threshold: float = DEFAULT_THRESHOLD,
) -> Event | None:
    """Return the first event whose title scores strictly above threshold, or None.

    First match in list order wins, even if a later event scores higher.
    """
    for event in existing_events:
        score = compare_two_strings(candidate_title, event.title)
        if score > threshold:
            logger.info(
                "'%s' looks like existing '%s' (score %.2f)",
                candidate_title, event.title, score,
            )
            return event
    return None
