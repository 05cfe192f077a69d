"""Shared test fixtures and configuration.

Sets up environment variables before any dayplanner imports so
dayplanner.config builds predictable settings, and provides common
fixtures like a fixed "today" and fake classifiers.
"""

import os

# Patch env vars BEFORE any dayplanner imports
os.environ.setdefault("CLASSIFIER_PROVIDER", "http")
os.environ.setdefault("CATEGORIZE_URL", "http://localhost:5000/categorize")
os.environ.setdefault("WEEKDAY_LANGUAGE", "en")
os.environ.setdefault("DUPLICATE_THRESHOLD", "0.8")
os.environ.setdefault("LLM_API_KEY", "fake-llm-key-for-tests")

from datetime import date
from unittest.mock import AsyncMock

import pytest

# 2026-10-19 is a Monday
MONDAY = date(2026, 10, 19)


@pytest.fixture
def monday():
    return MONDAY


@pytest.fixture
def classifier():
    """A classifier that always answers "exercise"."""
    fake = AsyncMock()
    fake.classify = AsyncMock(return_value="exercise")
    return fake


@pytest.fixture
def failing_classifier():
    """A classifier whose transport is down."""
    from dayplanner.ports.classifier_port import ClassificationUnavailable

    fake = AsyncMock()
    fake.classify = AsyncMock(side_effect=ClassificationUnavailable("connection refused"))
    return fake


@pytest.fixture
def planner(classifier):
    """A Planner pinned to Monday 2026-10-19 with the "exercise" classifier."""
    from dayplanner.core.planner_service import Planner

    return Planner(classifier, today=lambda: MONDAY)
