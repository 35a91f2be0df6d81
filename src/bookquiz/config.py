"""
Quiz Configuration and settings.

QuizSettings contains what the quiz engine and its persistence layer need.
Values come from BOOKQUIZ_* environment variables or a local .env file.
"""

import logging
from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class QuizSettings(BaseSettings):
    """Settings shared by the quiz engine and its collaborators."""

    model_config = SettingsConfigDict(
        env_prefix="BOOKQUIZ_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application
    env: Literal["development", "staging", "production"] = "development"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    # Seconds the new-reader / mismatched-taste narrative stays up
    auto_advance_seconds: float = Field(default=2.5, ge=0)

    # 0 = unbounded persistence queue
    persistence_queue_size: int = Field(default=0, ge=0)

    # Supabase (optional; only needed by SupabasePersistenceClient)
    supabase_url: str | None = None
    supabase_key: str | None = None
    sessions_table: str = "quiz_sessions"

    @property
    def is_development(self) -> bool:
        return self.env == "development"

    @property
    def is_production(self) -> bool:
        return self.env == "production"


@lru_cache
def get_settings() -> QuizSettings:
    """Get cached QuizSettings instance."""
    return QuizSettings()


def configure_logging(settings: QuizSettings | None = None) -> None:
    """Apply the configured log level to the bookquiz logger tree."""
    settings = settings or get_settings()
    logging.getLogger("bookquiz").setLevel(settings.log_level)
