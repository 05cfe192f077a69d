"""Classifier port: abstract interface for event categorization.

Core modules depend on this protocol, never on a specific provider.
"""

from __future__ import annotations

from typing import Protocol


class ClassificationUnavailable(Exception):
    """Raised when a classifier cannot produce a category label."""


class CategoryClassifier(Protocol):
    """Abstract classifier interface used by core modules."""

    async def classify(self, text: str) -> str: ...
