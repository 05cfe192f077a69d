"""HTTP category classifier: the local /categorize service.

Sends {"text": ...} and expects {"category": "..."} back. Every failure
(timeout, connection error, HTTP error status, malformed body) is raised
as ClassificationUnavailable; no retries.
"""

from __future__ import annotations

import logging

import httpx

from dayplanner.ports.classifier_port import ClassificationUnavailable

logger = logging.getLogger(__name__)

_DEFAULT_URL = "http://localhost:5000/categorize"
_TIMEOUT_SECONDS = 5.0


class HttpCategoryClassifier:
    """Implements CategoryClassifier against a POST /categorize endpoint."""

    def __init__(self, url: str = _DEFAULT_URL, timeout: float = _TIMEOUT_SECONDS) -> None:
        self._url = url
        self._timeout = timeout

    async def classify(self, text: str) -> str:
        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                resp = await client.post(self._url, json={"text": text})
                resp.raise_for_status()
                data = resp.json()
        except (httpx.HTTPError, ValueError) as exc:
            raise ClassificationUnavailable(f"{self._url}: {exc}") from exc

        logger.debug("Classifier response for '%s': %s", text, data)

        category = data.get("category") if isinstance(data, dict) else None
        if not isinstance(category, str) or not category.strip():
            raise ClassificationUnavailable(f"Malformed classifier response: {data!r}")

        return category.strip()
