"""LLM category classifier: asks a chat model for one label.

Used instead of the /categorize service when CLASSIFIER_PROVIDER=llm.
Each classifier owns a single SDK client, created on the first call.
SDKs are imported lazily, so only the one in use must be installed
(pip install "dayplanner[llm]").
"""

from __future__ import annotations

import logging
from typing import Awaitable, Callable

from dayplanner.data.models import CATEGORIES
from dayplanner.ports.classifier_port import ClassificationUnavailable

logger = logging.getLogger(__name__)

_DEFAULT_MODELS: dict[str, str] = {
    "gemini": "gemini-2.0-flash",
    "anthropic": "claude-haiku-4-5-20251001",
    "openai": "gpt-4o-mini",
    "cohere": "command-a-03-2025",
}

# Labels are a word or two; longer answers are cut off.
_MAX_LABEL_TOKENS = 10

_SYSTEM_PROMPT = """\
You label entries in a personal calendar.
Answer with exactly one label from this list, written as it appears:
{labels}

The labels are listed in this order of meaning: meetings, calls and
appointments with other people; sports and physical activity; errands,
chores, hobbies and family time; anything else.
The entry may be written in any language. Reply with the label only.
"""

_AskFn = Callable[[str], Awaitable[str]]


def _clean_label(raw_text: str) -> str:
    """Strip code fences, quotes and whitespace from the model's raw answer."""
    cleaned = raw_text.strip()
    cleaned = cleaned.removeprefix("```").removesuffix("```").strip()
    cleaned = cleaned.strip("\"'`.").strip()
    return cleaned.lower()


class LlmCategoryClassifier:
    """Implements CategoryClassifier with one LLM provider client."""

    def __init__(
        self,
        provider: str = "gemini",
        api_key: str = "",
        model: str = "",
        labels: tuple[str, ...] = CATEGORIES,
    ) -> None:
        provider = provider.strip().lower()
        if provider not in _DEFAULT_MODELS:
            raise ValueError(
                f"Unknown LLM_PROVIDER={provider!r}. Supported: {', '.join(_DEFAULT_MODELS)}"
            )
        self._provider = provider
        self._model = model or _DEFAULT_MODELS[provider]
        self._api_key = api_key
        self._labels = labels
        self._system = _SYSTEM_PROMPT.format(labels="\n".join(f"- {label}" for label in labels))
        self._ask: _AskFn | None = None

    def _chat_messages(self, text: str) -> list[dict[str, str]]:
        return [
            {"role": "system", "content": self._system},
            {"role": "user", "content": text},
        ]

    def _connect(self) -> _AskFn:
        """Create the provider client and return a call that labels one entry."""
        logger.info("LLM classifier: %s, model: %s", self._provider, self._model)

        if self._provider == "anthropic":
            import anthropic

            client = anthropic.AsyncAnthropic(api_key=self._api_key)

            async def ask(text: str) -> str:
                response = await client.messages.create(
                    model=self._model,
                    max_tokens=_MAX_LABEL_TOKENS,
                    temperature=0,
                    system=self._system,
                    messages=[{"role": "user", "content": text}],
                )
                return response.content[0].text

            return ask

        if self._provider == "openai":
            from openai import AsyncOpenAI

            client = AsyncOpenAI(api_key=self._api_key)

            async def ask(text: str) -> str:
                response = await client.chat.completions.create(
                    model=self._model,
                    max_tokens=_MAX_LABEL_TOKENS,
                    temperature=0,
                    messages=self._chat_messages(text),
                )
                return response.choices[0].message.content or ""

            return ask

        if self._provider == "cohere":
            import cohere

            client = cohere.AsyncClientV2(api_key=self._api_key)

            async def ask(text: str) -> str:
                response = await client.chat(
                    model=self._model,
                    max_tokens=_MAX_LABEL_TOKENS,
                    temperature=0,
                    messages=self._chat_messages(text),
                )
                return response.message.content[0].text

            return ask

        import google.generativeai as genai

        # The Gemini SDK keeps its API key in module state, not per model.
        genai.configure(api_key=self._api_key)
        gemini = genai.GenerativeModel(
            model_name=self._model,
            system_instruction=self._system,
            generation_config=genai.types.GenerationConfig(
                max_output_tokens=_MAX_LABEL_TOKENS,
                temperature=0,
            ),
        )

        async def ask(text: str) -> str:
            response = await gemini.generate_content_async(text)
            return response.text

        return ask

    async def classify(self, text: str) -> str:
        try:
            if self._ask is None:
                self._ask = self._connect()
            raw = await self._ask(text)
        except Exception as exc:
            raise ClassificationUnavailable(f"{self._provider} call failed: {exc}") from exc

        logger.debug("LLM category response for '%s': %s", text, raw)

        label = _clean_label(raw or "")
        if not label:
            raise ClassificationUnavailable("LLM returned an empty category")
        if label not in self._labels:
            # Unknown labels are accepted; color lookup falls back for them.
            logger.info("LLM returned label outside the known set: '%s'", label)
        return label
