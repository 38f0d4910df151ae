"""
Application configuration.

Loads settings from environment variables (prefix ``LOCTABLE_``) and an
optional ``.env`` file, with sensible defaults.
"""

from __future__ import annotations

import re
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict

_LANGUAGE_SEPARATORS = re.compile(r"[,;\s]+")


def split_languages(text: str) -> list[str]:
    """Split "en, ro;fr" into codes, dropping blanks and case-insensitive repeats."""
    result: list[str] = []
    seen: set[str] = set()
    for part in _LANGUAGE_SEPARATORS.split(text or ""):
        code = part.strip()
        if code and code.casefold() not in seen:
            seen.add(code.casefold())
            result.append(code)
    return result


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(
        env_prefix="LOCTABLE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ==========================================================================
    # Environment
    # ==========================================================================

    environment: str = "development"
    debug: bool = False
    log_level: str = "INFO"

    # ==========================================================================
    # Files (keys relative to data_dir)
    # ==========================================================================

    data_dir: str = "./data"
    table_key: str = "Localization/LocalizationTable.yaml"
    csv_key: str = "Localization/localization.csv"  # translator file
    json_prefix: str = "Resources/Localization"  # runtime JSON output

    # ==========================================================================
    # Languages & scanning
    # ==========================================================================

    source_language: str = "en"
    languages: str = "en,ro"  # delimited by comma, semicolon or space
    include_scenes: bool = True
    include_prefabs: bool = True

    # Reject imports whose header lacks the source language column
    require_source_language_on_import: bool = False

    # ==========================================================================
    # API Server
    # ==========================================================================

    api_host: str = "127.0.0.1"
    api_port: int = 8000
    cors_origins: str = "http://localhost:3000"

    # ==========================================================================
    # Helpers
    # ==========================================================================

    @property
    def languages_list(self) -> list[str]:
        """Configured languages, with the source language first if it was left out."""
        langs = split_languages(self.languages)
        if self.source_language.casefold() not in {l.casefold() for l in langs}:
            langs.insert(0, self.source_language)
        return langs

    @property
    def cors_origins_list(self) -> list[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

    @property
    def is_production(self) -> bool:
        return self.environment == "production"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
