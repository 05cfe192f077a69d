"""Classifier adapter factory: creates the right classifier based on config."""

from __future__ import annotations

from dayplanner.config import settings
from dayplanner.data.models import CATEGORY_TABLES
from dayplanner.ports.classifier_port import CategoryClassifier


def create_classifier() -> CategoryClassifier:
    """Return the classifier matching the CLASSIFIER_PROVIDER setting."""
    provider = settings.CLASSIFIER_PROVIDER.lower()

    if provider == "http":
        from dayplanner.adapters.http_classifier import HttpCategoryClassifier

        return HttpCategoryClassifier(
            url=settings.CATEGORIZE_URL,
            timeout=settings.CATEGORIZE_TIMEOUT_SECONDS,
        )

    if provider == "llm":
        from dayplanner.adapters.llm_classifier import LlmCategoryClassifier

        return LlmCategoryClassifier(
            provider=settings.LLM_PROVIDER,
            api_key=settings.LLM_API_KEY,
            model=settings.LLM_MODEL,
            labels=CATEGORY_TABLES[settings.WEEKDAY_LANGUAGE].labels,
        )

    raise ValueError(f"Unknown CLASSIFIER_PROVIDER: {provider!r}")
