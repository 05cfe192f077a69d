"""
Day Planner - Weekday Phrase Parser.

Turns free text such as "Friday gym with Dana" into a target date and an
event title. Only the seven literal weekday names of one language are
recognized; everything else in the text is treated as the title.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, timedelta

logger = logging.getLogger(__name__)

# Weekday name → index with Sunday = 0. Declaration order is the lookup order.
WEEKDAY_NAMES: dict[str, dict[str, int]] = {
    "en": {
        "Sunday": 0,
        "Monday": 1,
        "Tuesday": 2,
        "Wednesday": 3,
        "Thursday": 4,
        "Friday": 5,
        "Saturday": 6,
    },
    "ko": {
        "일요일": 0,
        "월요일": 1,
        "화요일": 2,
        "수요일": 3,
        "목요일": 4,
        "금요일": 5,
        "토요일": 6,
    },
}


@dataclass
class ParsedPhrase:
    """Result of parsing an event description."""

    event_date: date
    title: str
    weekday: str | None = None   # the weekday name that was consumed, if any


def sunday_based_weekday(day: date) -> int:
    """Weekday index with Sunday = 0 … Saturday = 6."""
    return day.isoweekday() % 7


def days_until(target_weekday: int, today: date) -> int:
    """Days to the next occurrence of target_weekday, strictly after today (1..7)."""
    return (target_weekday - sunday_based_weekday(today) + 7) % 7 or 7


def parse_weekday_phrase(
    text: str,
    today: date | None = None,
    weekday_names: dict[str, int] | None = None,
) -> ParsedPhrase | None:
    """Resolve the target date and title of an event description.

    The first weekday name found (in table order, not position in the text)
    moves the date to its next occurrence after today and its first
    occurrence is cut out of the title. Any other weekday names stay in the
    title untouched. Without a weekday name the event lands on today.

    Returns None when nothing usable is left for the title.
    """
    if today is None:
        today = date.today()
    if weekday_names is None:
        weekday_names = WEEKDAY_NAMES["en"]

    found = next((name for name in weekday_names if name in text), None)

    if found is None:
        title = text.strip()
        event_date = today
    else:
        event_date = today + timedelta(days=days_until(weekday_names[found], today))
        title = text.replace(found, "", 1).strip()

    if not title:
        logger.info("Rejected event text with no usable title: '%s'", text)
        return None

    logger.debug("Parsed '%s' → '%s' on %s", text, title, event_date.isoformat())
    return ParsedPhrase(event_date=event_date, title=title, weekday=found)
