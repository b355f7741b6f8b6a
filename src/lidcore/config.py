"""Centralised, env-driven configuration using pydantic-settings."""

from __future__ import annotations

import logging
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_LANGUAGES = "da,de,en,es,fi,fr,it,nl,pt,sv"


class Settings(BaseSettings):
    """All tunables are loaded from ``LIDCORE_*`` environment variables (or .env)."""

    # ── N-gram profiles ─────────────────────────────────────────────────────
    min_ngram_length: int = Field(default=1, ge=1)
    max_ngram_length: int = Field(default=4, ge=1)
    analyze_length: int = Field(default=0, ge=0)
    languages: str = DEFAULT_LANGUAGES
    profile_directory: str | None = None

    # ── Identifier pool ─────────────────────────────────────────────────────
    pool_max_size: int = Field(default=8, ge=1)
    pool_timeout: float = Field(default=5.0, ge=0)

    # ── Caller-level heuristics ─────────────────────────────────────────────
    short_text_threshold: int = Field(default=150, ge=0)
    short_text_language: str = "en"

    # ── Encoding ────────────────────────────────────────────────────────────
    default_encoding: str = "utf-8"
    min_confidence: int = -1

    # ── Logging ─────────────────────────────────────────────────────────────
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_prefix="LIDCORE_",
        env_file=".env",
        extra="ignore",
    )

    @property
    def language_list(self) -> list[str]:
        """Return the language mapping table as a Python list."""
        return [code.strip().lower() for code in self.languages.split(",") if code.strip()]


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()


def configure_logging(level: str | None = None) -> None:
    """Install a basic console handler for the ``lidcore`` loggers."""
    logging.basicConfig(
        level=(level or get_settings().log_level).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
