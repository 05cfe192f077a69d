"""
Day Planner - Centralized configuration.

Loads all settings from .env and validates them.
Every other module reads its knobs from the `settings` singleton.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, field_validator

# Load .env from project root (two levels up from dayplanner/config.py)
_ENV_PATH = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(_ENV_PATH)


class Settings(BaseModel):
    """Application settings loaded from environment variables."""

    # Category classifier: "http" | "llm"
    CLASSIFIER_PROVIDER: str = "http"

    # HTTP classifier (POST {"text": ...} -> {"category": ...})
    CATEGORIZE_URL: str = "http://localhost:5000/categorize"
    CATEGORIZE_TIMEOUT_SECONDS: float = 5.0

    # LLM classifier (only needed when CLASSIFIER_PROVIDER=llm)
    LLM_PROVIDER: str = "gemini"
    LLM_MODEL: str = ""          # empty → smart default per provider
    LLM_API_KEY: str = ""

    # Intake pipeline
    DEFAULT_CATEGORY: str = ""          # empty → the language's fallback label
    DUPLICATE_THRESHOLD: float = 0.8
    WEEKDAY_LANGUAGE: str = "en"

    @field_validator("CLASSIFIER_PROVIDER", "WEEKDAY_LANGUAGE", mode="before")
    @classmethod
    def normalize_choice(cls, v: str) -> str:
        return str(v).strip().lower()

    @field_validator("WEEKDAY_LANGUAGE")
    @classmethod
    def check_language(cls, v: str) -> str:
        from dayplanner.core.weekday_parser import WEEKDAY_NAMES

        if v not in WEEKDAY_NAMES:
            raise ValueError(
                f"Unsupported WEEKDAY_LANGUAGE={v!r}. Supported: {', '.join(WEEKDAY_NAMES)}"
            )
        return v

    @field_validator("DUPLICATE_THRESHOLD", mode="before")
    @classmethod
    def parse_threshold(cls, v: str | float) -> float:
        threshold = float(v)
        if not 0.0 <= threshold <= 1.0:
            raise ValueError(f"DUPLICATE_THRESHOLD must be within [0, 1], got {threshold}")
        return threshold

    @field_validator("CATEGORIZE_TIMEOUT_SECONDS", mode="before")
    @classmethod
    def parse_timeout(cls, v: str | float) -> float:
        return float(v)

    @field_validator("DEFAULT_CATEGORY", mode="before")
    @classmethod
    def parse_default_category(cls, v: str) -> str:
        return str(v).strip()


def _load_settings() -> Settings:
    """Load settings from environment, validating provider-specific keys."""
    provider = os.getenv("CLASSIFIER_PROVIDER", "http")
    llm_api_key = os.getenv("LLM_API_KEY", "")

    if provider.strip().lower() == "llm" and (not llm_api_key or llm_api_key.startswith("your-")):
        print("ERROR: LLM_API_KEY is missing or not set in .env", file=sys.stderr)
        sys.exit(1)

    return Settings(
        CLASSIFIER_PROVIDER=provider,
        CATEGORIZE_URL=os.getenv("CATEGORIZE_URL", "http://localhost:5000/categorize"),
        CATEGORIZE_TIMEOUT_SECONDS=os.getenv("CATEGORIZE_TIMEOUT_SECONDS", "5"),
        LLM_PROVIDER=os.getenv("LLM_PROVIDER", "gemini"),
        LLM_MODEL=os.getenv("LLM_MODEL", ""),
        LLM_API_KEY=llm_api_key,
        DEFAULT_CATEGORY=os.getenv("DEFAULT_CATEGORY", ""),
        DUPLICATE_THRESHOLD=os.getenv("DUPLICATE_THRESHOLD", "0.8"),
        WEEKDAY_LANGUAGE=os.getenv("WEEKDAY_LANGUAGE", "en"),
    )


# Singleton: imported by all other modules as:
#   from dayplanner.config import settings
settings = _load_settings()
