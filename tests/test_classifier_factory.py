"""Tests for the classifier adapter factory."""

import pytest
from unittest.mock import patch

from dayplanner.adapters.classifier_factory import create_classifier
from dayplanner.adapters.http_classifier import HttpCategoryClassifier
from dayplanner.adapters.llm_classifier import LlmCategoryClassifier
from dayplanner.data.models import CATEGORIES, KO_CATEGORIES


class TestCreateClassifier:
    @patch("dayplanner.adapters.classifier_factory.settings")
    def test_returns_http_classifier(self, mock_settings):
        mock_settings.CLASSIFIER_PROVIDER = "http"
        mock_settings.CATEGORIZE_URL = "http://classifier.local/categorize"
        mock_settings.CATEGORIZE_TIMEOUT_SECONDS = 3.0
        classifier = create_classifier()
        assert isinstance(classifier, HttpCategoryClassifier)
        assert classifier._url == "http://classifier.local/categorize"
        assert classifier._timeout == 3.0

    @patch("dayplanner.adapters.classifier_factory.settings")
    def test_returns_llm_classifier(self, mock_settings):
        mock_settings.CLASSIFIER_PROVIDER = "llm"
        mock_settings.LLM_PROVIDER = "anthropic"
        mock_settings.LLM_API_KEY = "fake-key"
        mock_settings.LLM_MODEL = ""
        mock_settings.WEEKDAY_LANGUAGE = "en"
        classifier = create_classifier()
        assert isinstance(classifier, LlmCategoryClassifier)
        assert classifier._provider == "anthropic"
        assert classifier._api_key == "fake-key"
        assert classifier._labels == CATEGORIES

    @patch("dayplanner.adapters.classifier_factory.settings")
    def test_llm_classifier_uses_korean_labels(self, mock_settings):
        mock_settings.CLASSIFIER_PROVIDER = "llm"
        mock_settings.LLM_PROVIDER = "gemini"
        mock_settings.LLM_API_KEY = "fake-key"
        mock_settings.LLM_MODEL = "gemini-custom"
        mock_settings.WEEKDAY_LANGUAGE = "ko"
        classifier = create_classifier()
        assert classifier._labels == KO_CATEGORIES
        assert classifier._model == "gemini-custom"

    @patch("dayplanner.adapters.classifier_factory.settings")
    def test_case_insensitive(self, mock_settings):
        mock_settings.CLASSIFIER_PROVIDER = "HTTP"
        mock_settings.CATEGORIZE_URL = "http://localhost:5000/categorize"
        mock_settings.CATEGORIZE_TIMEOUT_SECONDS = 5.0
        assert isinstance(create_classifier(), HttpCategoryClassifier)

    @patch("dayplanner.adapters.classifier_factory.settings")
    def test_unknown_provider_raises(self, mock_settings):
        mock_settings.CLASSIFIER_PROVIDER = "nonexistent"
        with pytest.raises(ValueError, match="Unknown CLASSIFIER_PROVIDER"):
            create_classifier()
