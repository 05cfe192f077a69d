"""Tests for dayplanner.core.intake: the event intake pipeline."""

from datetime import date

import pytest
from unittest.mock import AsyncMock

from dayplanner.core.intake import (
    DuplicateDetected,
    IntakeError,
    IntakeResult,
    InvalidTime,
    ParseRejected,
    normalize_time,
    prepare_event,
)
from dayplanner.core.weekday_parser import WEEKDAY_NAMES
from dayplanner.data.event_store import EventStore
from dayplanner.data.models import Event
from dayplanner.ports.classifier_port import ClassificationUnavailable

MONDAY = date(2026, 10, 19)


def _classifier(**kwargs):
    fake = AsyncMock()
    fake.classify = AsyncMock(**kwargs)
    return fake


class TestNormalizeTime:
    def test_valid(self):
        assert normalize_time("18:30") == "18:30"

    def test_zero_pads(self):
        assert normalize_time("9:05") == "09:05"

    def test_strips(self):
        assert normalize_time(" 07:00 ") == "07:00"

    @pytest.mark.parametrize("value", ["", "24:00", "12:60", "noon", "7pm", "12-30"])
    def test_invalid(self, value):
        with pytest.raises(InvalidTime):
            normalize_time(value)


class TestPrepareEvent:
    @pytest.mark.asyncio
    async def test_friday_exercise(self):
        classifier = _classifier(return_value="exercise")
        result = await prepare_event(EventStore(), "Friday exercise", "18:00", classifier, today=MONDAY)

        assert isinstance(result, IntakeResult)
        assert result.date_key == "2026-10-23"
        assert result.event == Event(title="exercise", time="18:00", category="exercise")

    @pytest.mark.asyncio
    async def test_classifies_the_full_text(self):
        classifier = _classifier(return_value="exercise")
        await prepare_event(EventStore(), "Friday exercise", "18:00", classifier, today=MONDAY)
        classifier.classify.assert_awaited_once_with("Friday exercise")

    @pytest.mark.asyncio
    async def test_no_weekday_lands_on_today(self):
        result = await prepare_event(
            EventStore(), "exercise", "07:00", _classifier(return_value="exercise"), today=MONDAY,
        )
        assert result.date_key == "2026-10-19"
        assert result.event.title == "exercise"

    @pytest.mark.asyncio
    async def test_weekday_only_rejected(self):
        classifier = _classifier(return_value="other")
        with pytest.raises(ParseRejected):
            await prepare_event(EventStore(), "Friday", "10:00", classifier, today=MONDAY)
        classifier.classify.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_invalid_time_rejected_before_anything_else(self):
        classifier = _classifier(return_value="other")
        with pytest.raises(InvalidTime):
            await prepare_event(EventStore(), "Friday gym", "late", classifier, today=MONDAY)
        classifier.classify.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_duplicate_rejected_without_classifier_call(self):
        store = EventStore().create("2026-10-19", Event("team meeting", "10:00", "meeting"))
        classifier = _classifier(return_value="meeting")

        with pytest.raises(DuplicateDetected) as exc_info:
            await prepare_event(store, "team meetings", "11:00", classifier, today=MONDAY)

        assert exc_info.value.existing_title == "team meeting"
        assert "team meeting" in str(exc_info.value)
        classifier.classify.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_duplicate_check_only_on_target_day(self):
        store = EventStore().create("2026-10-19", Event("team meeting", "10:00", "meeting"))
        result = await prepare_event(
            store, "Friday team meeting", "10:00", _classifier(return_value="meeting"), today=MONDAY,
        )
        assert result.date_key == "2026-10-23"

    @pytest.mark.asyncio
    async def test_classifier_failure_uses_default(self):
        classifier = _classifier(side_effect=ClassificationUnavailable("down"))
        result = await prepare_event(
            EventStore(), "read", "21:00", classifier, today=MONDAY, default_category="personal",
        )
        assert result.event.category == "personal"

    @pytest.mark.asyncio
    async def test_custom_threshold(self):
        store = EventStore().create("2026-10-19", Event("healed", "10:00", "other"))
        with pytest.raises(DuplicateDetected):
            await prepare_event(
                store, "sealed", "10:00", _classifier(return_value="other"),
                today=MONDAY, duplicate_threshold=0.7,
            )

    @pytest.mark.asyncio
    async def test_korean_weekday_table(self):
        result = await prepare_event(
            EventStore(), "금요일에 운동", "18:00", _classifier(return_value="exercise"),
            today=MONDAY, weekday_names=WEEKDAY_NAMES["ko"],
        )
        assert result.date_key == "2026-10-23"
        assert result.event.title == "에 운동"

    @pytest.mark.asyncio
    async def test_store_is_not_mutated(self):
        store = EventStore()
        await prepare_event(store, "gym", "18:00", _classifier(return_value="exercise"), today=MONDAY)
        assert len(store) == 0

    def test_errors_share_base_class(self):
        for exc in (ParseRejected("x"), DuplicateDetected("x"), InvalidTime("x")):
            assert isinstance(exc, IntakeError)
