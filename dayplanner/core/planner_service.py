"""
Day Planner - UI-Agnostic Planner Service.

Owns the session state (selected day, category filter, event store,
category cache, edit mode) and exposes every action a calendar UI needs.
Returns structured response objects; never renders anything itself.

State follows a functional update discipline: the EventStore is immutable
and the planner swaps in the new store each operation returns.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from datetime import date
from enum import Enum
from typing import TYPE_CHECKING, Callable, Mapping

from dayplanner.core.duplicate_detector import DEFAULT_THRESHOLD
from dayplanner.core.intake import IntakeError, InvalidTime, normalize_time, prepare_event
from dayplanner.core.weekday_parser import WEEKDAY_NAMES
from dayplanner.data.event_store import EventStore, date_key
from dayplanner.data.models import (
    ALL_CATEGORIES,
    CATEGORY_COLORS,
    CATEGORY_TABLES,
    DEFAULT_CATEGORY,
    Event,
    color_for,
)

if TYPE_CHECKING:
    from dayplanner.ports.classifier_port import CategoryClassifier

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Response types
# ---------------------------------------------------------------------------


class ResponseKind(Enum):
    SUCCESS = "success"
    ERROR = "error"
    NO_ACTION = "no_action"


@dataclass
class ServiceResponse:
    kind: ResponseKind
    message: str


@dataclass
class SuccessResponse(ServiceResponse):
    event: Event | None = None
    date_key: str = ""


@dataclass
class ErrorResponse(ServiceResponse):
    pass


@dataclass
class NoActionResponse(ServiceResponse):
    pass


@dataclass
class EventView:
    """One row of the selected day's list, ready to display."""

    event: Event
    color: str

    @property
    def line(self) -> str:
        return f"{self.event.title} at {self.event.time} ({self.event.category})"


@dataclass
class EditState:
    """The event currently open in the edit form and its draft fields."""

    original_title: str
    title: str
    time: str


# ---------------------------------------------------------------------------
# Planner
# ---------------------------------------------------------------------------


class Planner:
    """Single owner of the planner's session state."""

    def __init__(
        self,
        classifier: CategoryClassifier,
        today: Callable[[], date] = date.today,
        colors: Mapping[str, str] = CATEGORY_COLORS,
        weekday_names: dict[str, int] | None = None,
        duplicate_threshold: float = DEFAULT_THRESHOLD,
        default_category: str = DEFAULT_CATEGORY,
    ) -> None:
        self._classifier = classifier
        self._today = today
        self._colors = dict(colors)
        self._weekday_names = weekday_names or WEEKDAY_NAMES["en"]
        self._duplicate_threshold = duplicate_threshold
        self._default_category = default_category

        self._store = EventStore()
        self._categories: dict[str, str] = {}
        self._selected_date = today()
        self._category_filter = ALL_CATEGORIES
        self._editing: EditState | None = None
        self._in_flight = 0

    @classmethod
    def from_settings(cls, classifier: CategoryClassifier | None = None) -> Planner:
        """Build a planner wired to the configured classifier and settings.

        WEEKDAY_LANGUAGE picks both the weekday names and the category
        table; DEFAULT_CATEGORY overrides the table's fallback label.
        """
        from dayplanner.config import settings

        if classifier is None:
            from dayplanner.adapters.classifier_factory import create_classifier
            classifier = create_classifier()

        table = CATEGORY_TABLES[settings.WEEKDAY_LANGUAGE]
        return cls(
            classifier,
            colors=table.colors,
            weekday_names=WEEKDAY_NAMES[settings.WEEKDAY_LANGUAGE],
            duplicate_threshold=settings.DUPLICATE_THRESHOLD,
            default_category=settings.DEFAULT_CATEGORY or table.default,
        )

    # ------------------------------------------------------------------
    # State accessors
    # ------------------------------------------------------------------

    @property
    def store(self) -> EventStore:
        return self._store

    @property
    def categories(self) -> dict[str, str]:
        """Title → last resolved category. Informational only."""
        return dict(self._categories)

    @property
    def selected_date(self) -> date:
        return self._selected_date

    @property
    def selected_key(self) -> str:
        return date_key(self._selected_date)

    @property
    def category_filter(self) -> str:
        return self._category_filter

    @property
    def editing(self) -> EditState | None:
        return self._editing

    @property
    def intake_in_flight(self) -> bool:
        """True while an add_event call is waiting on the classifier."""
        return self._in_flight > 0

    # ------------------------------------------------------------------
    # Selection and display
    # ------------------------------------------------------------------

    def select_date(self, day: date) -> None:
        self._selected_date = day

    def set_category_filter(self, category: str) -> None:
        """Show only one label, or every label with ALL_CATEGORIES.

        Accepted labels are the keys of this planner's color table plus
        its default category.
        """
        known = {ALL_CATEGORIES, self._default_category, *self._colors}
        if category not in known:
            raise ValueError(f"Unknown category filter: {category!r}")
        self._category_filter = category

    def color_for(self, category: str) -> str:
        return color_for(category, self._colors, self._default_category)

    def visible_events(self) -> list[EventView]:
        """Events of the selected day that pass the category filter."""
        events = self._store.events_for(self.selected_key)
        if self._category_filter != ALL_CATEGORIES:
            events = [ev for ev in events if ev.category == self._category_filter]
        return [EventView(event=ev, color=self.color_for(ev.category)) for ev in events]

    # ------------------------------------------------------------------
    # Intake
    # ------------------------------------------------------------------

    async def add_event(self, text: str, time: str) -> ServiceResponse:
        """Run the intake pipeline and commit the new event on success.

        The commit applies to the store as it is once classification
        returns, so overlapping calls all land (last commit wins).
        """
        if not text.strip() or not time.strip():
            return NoActionResponse(
                kind=ResponseKind.NO_ACTION,
                message="Enter an event description and a time.",
            )

        self._in_flight += 1
        try:
            result = await prepare_event(
                self._store,
                text,
                time,
                self._classifier,
                today=self._today(),
                weekday_names=self._weekday_names,
                duplicate_threshold=self._duplicate_threshold,
                default_category=self._default_category,
            )
        except IntakeError as exc:
            logger.info("Intake rejected for '%s': %s", text, exc)
            return ErrorResponse(kind=ResponseKind.ERROR, message=str(exc))
        finally:
            self._in_flight -= 1

        self._store = self._store.create(result.date_key, result.event)
        self._categories = {**self._categories, result.event.title: result.event.category}

        return SuccessResponse(
            kind=ResponseKind.SUCCESS,
            message=f"Added '{result.event.title}' on {result.date_key} at {result.event.time}",
            event=result.event,
            date_key=result.date_key,
        )

    # ------------------------------------------------------------------
    # Mutations on the selected day
    # ------------------------------------------------------------------

    def _find(self, title: str) -> Event | None:
        """First event on the selected day with this exact title."""
        return next(
            (ev for ev in self._store.events_for(self.selected_key) if ev.title == title),
            None,
        )

    def _not_found(self, title: str) -> NoActionResponse:
        return NoActionResponse(
            kind=ResponseKind.NO_ACTION,
            message=f"No event named '{title}' on {self.selected_key}",
        )

    def toggle_completion(self, title: str) -> ServiceResponse:
        match = self._find(title)
        if match is None:
            return self._not_found(title)

        self._store = self._store.toggle_completion(self.selected_key, title)
        state = "done" if not match.completed else "not done"
        return SuccessResponse(
            kind=ResponseKind.SUCCESS,
            message=f"Marked '{title}' as {state}",
            event=replace(match, completed=not match.completed),
            date_key=self.selected_key,
        )

    def delete_event(self, title: str) -> ServiceResponse:
        match = self._find(title)
        if match is None:
            return self._not_found(title)

        self._store = self._store.delete(self.selected_key, title)
        if self._editing is not None and self._editing.original_title == title:
            self._editing = None
        return SuccessResponse(
            kind=ResponseKind.SUCCESS,
            message=f"Deleted '{title}' from {self.selected_key}",
            event=match,
            date_key=self.selected_key,
        )

    # ------------------------------------------------------------------
    # Edit mode (title and time only)
    # ------------------------------------------------------------------

    def begin_edit(self, title: str) -> ServiceResponse:
        match = self._find(title)
        if match is None:
            return ErrorResponse(
                kind=ResponseKind.ERROR,
                message=f"No event named '{title}' on {self.selected_key}",
            )
        self._editing = EditState(original_title=match.title, title=match.title, time=match.time)
        return SuccessResponse(
            kind=ResponseKind.SUCCESS,
            message=f"Editing '{match.title}'",
            event=match,
            date_key=self.selected_key,
        )

    def save_edit(self, title: str, time: str) -> ServiceResponse:
        """Apply the edited title and time to the event being edited."""
        if self._editing is None:
            return NoActionResponse(kind=ResponseKind.NO_ACTION, message="Nothing is being edited.")

        new_title = title.strip()
        if not new_title or not time.strip():
            return NoActionResponse(
                kind=ResponseKind.NO_ACTION,
                message="Title and time are both required.",
            )

        try:
            new_time = normalize_time(time)
        except InvalidTime as exc:
            return ErrorResponse(kind=ResponseKind.ERROR, message=str(exc))

        original = self._editing.original_title
        self._store = self._store.update(
            self.selected_key,
            original,
            lambda ev: replace(ev, title=new_title, time=new_time),
        )
        if new_title != original and original in self._categories:
            categories = dict(self._categories)
            categories[new_title] = categories.pop(original)
            self._categories = categories
        self._editing = None
        logger.info("Edited '%s' → '%s' at %s on %s", original, new_title, new_time, self.selected_key)

        return SuccessResponse(
            kind=ResponseKind.SUCCESS,
            message=f"Updated '{new_title}' at {new_time}",
            date_key=self.selected_key,
        )

    def cancel_edit(self) -> None:
        self._editing = None
