"""
Day Planner - Event Intake Pipeline.

Turns one free-text submission into a ready-to-commit event:
validate time -> parse weekday phrase -> duplicate check -> categorize.

The duplicate check runs before categorization so a rejected submission
never costs a classifier call. The pipeline only reads the store;
committing the result is the caller's job.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import TYPE_CHECKING

from dayplanner.core.category_resolver import resolve_category
from dayplanner.core.duplicate_detector import DEFAULT_THRESHOLD, find_similar
from dayplanner.core.weekday_parser import parse_weekday_phrase
from dayplanner.data.event_store import date_key
from dayplanner.data.models import DEFAULT_CATEGORY, Event

if TYPE_CHECKING:
    from dayplanner.data.event_store import EventStore
    from dayplanner.ports.classifier_port import CategoryClassifier

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Errors: terminal for the current submission, nothing is committed
# ---------------------------------------------------------------------------


class IntakeError(Exception):
    """Base class for rejections shown to the user as a blocking message."""


class ParseRejected(IntakeError):
    def __init__(self, text: str) -> None:
        self.text = text
        super().__init__("Please enter an event title along with the weekday.")


class DuplicateDetected(IntakeError):
    def __init__(self, existing_title: str) -> None:
        self.existing_title = existing_title
        super().__init__(f"A similar event already exists: {existing_title}")


class InvalidTime(IntakeError):
    def __init__(self, value: str) -> None:
        self.value = value
        super().__init__(f"Invalid time '{value}'. Use HH:MM (24-hour).")


@dataclass
class IntakeResult:
    """An assembled event and the date-key it belongs to."""

    date_key: str
    event: Event


def normalize_time(value: str) -> str:
    """Validate a wall-clock time and return it as zero-padded "HH:MM"."""
    try:
        parsed = datetime.strptime(value.strip(), "%H:%M").time()
    except ValueError:
        raise InvalidTime(value) from None
    return f"{parsed.hour:02d}:{parsed.minute:02d}"


async def prepare_event(
    store: EventStore,
    text: str,
    time: str,
    classifier: CategoryClassifier,
    today: date | None = None,
    weekday_names: dict[str, int] | None = None,
    duplicate_threshold: float = DEFAULT_THRESHOLD,
    default_category: str = DEFAULT_CATEGORY,
) -> IntakeResult:
    """Run the intake pipeline for one submission.

    Raises:
        InvalidTime: time is not a valid HH:MM value.
        ParseRejected: no title is left after removing the weekday name.
        DuplicateDetected: a same-day event has a near-identical title.
    """
    event_time = normalize_time(time)

    parsed = parse_weekday_phrase(text, today=today, weekday_names=weekday_names)
    if parsed is None:
        raise ParseRejected(text)

    key = date_key(parsed.event_date)
    similar = find_similar(parsed.title, store.events_for(key), threshold=duplicate_threshold)
    if similar is not None:
        raise DuplicateDetected(similar.title)

    category = await resolve_category(classifier, text, default=default_category)

    return IntakeResult(
        date_key=key,
        event=Event(title=parsed.title, time=event_time, category=category),
    )
