"""
Day Planner - In-Memory Event Store.

Maps a date-key (ISO YYYY-MM-DD) to the ordered events of that day.
The store is immutable: every operation returns a new EventStore and the
tuple for the touched date-key is substituted, never mutated in place.
Other date-keys share their tuples with the previous store.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date
from types import MappingProxyType
from typing import Callable, Mapping

from dayplanner.data.models import Event

logger = logging.getLogger(__name__)


def date_key(day: date) -> str:
    """Canonical, locale-independent key for a calendar day."""
    return day.isoformat()


class EventStore:
    """Immutable date-key → events mapping.

    Title matching is exact equality with map/filter semantics: every event
    on the date-key whose title equals the match title is affected. Two
    events sharing a title (e.g. after a rename) are therefore always
    updated, toggled or deleted together.
    """

    def __init__(self, days: Mapping[str, tuple[Event, ...]] | None = None) -> None:
        self._days: Mapping[str, tuple[Event, ...]] = MappingProxyType(dict(days or {}))

    def __repr__(self) -> str:
        return f"EventStore({dict(self._days)!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, EventStore):
            return NotImplemented
        return dict(self._days) == dict(other._days)

    def __len__(self) -> int:
        return sum(len(events) for events in self._days.values())

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def events_for(self, key: str) -> list[Event]:
        """Return a copy of the events on a date-key, in insertion order."""
        return list(self._days.get(key, ()))

    def date_keys(self) -> list[str]:
        return sorted(self._days)

    # ------------------------------------------------------------------
    # Writes (copy-on-write)
    # ------------------------------------------------------------------

    def _with_day(self, key: str, events: tuple[Event, ...]) -> EventStore:
        days = dict(self._days)
        days[key] = events
        return EventStore(days)

    def create(self, key: str, event: Event) -> EventStore:
        """Append an event to a date-key, creating the day if absent."""
        logger.info("Adding '%s' at %s on %s", event.title, event.time, key)
        return self._with_day(key, self._days.get(key, ()) + (event,))

    def update(
        self, key: str, match_title: str, mutator: Callable[[Event], Event],
    ) -> EventStore:
        """Replace every event titled match_title with mutator(event)."""
        current = self._days.get(key)
        if current is None:
            return self
        updated = tuple(
            mutator(ev) if ev.title == match_title else ev for ev in current
        )
        return self._with_day(key, updated)

    def toggle_completion(self, key: str, match_title: str) -> EventStore:
        return self.update(
            key, match_title, lambda ev: replace(ev, completed=not ev.completed),
        )

    def delete(self, key: str, match_title: str) -> EventStore:
        """Remove every event titled match_title. Unknown titles are a no-op."""
        current = self._days.get(key)
        if current is None:
            return self
        remaining = tuple(ev for ev in current if ev.title != match_title)
        if len(remaining) != len(current):
            logger.info("Deleted '%s' on %s", match_title, key)
        return self._with_day(key, remaining)
