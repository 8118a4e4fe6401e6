"""
Configuration management for the Citro voice service.
Loads settings from environment variables with sensible defaults.
"""

from pathlib import Path
from typing import List
from pydantic_settings import BaseSettings
from pydantic import Field
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # =========================
    # Application Settings
    # =========================
    APP_NAME: str = "Citro Voice Service"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = Field(default=False, description="Enable debug mode")
    ENVIRONMENT: str = Field(default="development", description="Environment name")

    # =========================
    # Server Settings
    # =========================
    HOST: str = Field(default="0.0.0.0", description="Server host")
    PORT: int = Field(default=8000, description="Server port")
    CORS_ORIGINS: List[str] = Field(
        default=["*"],
        description="Origins allowed to call the API"
    )

    # =========================
    # Database Settings
    # =========================
    DATABASE_URL: str = Field(
        default="sqlite+aiosqlite:///./data/citro.db",
        description="Database connection URL"
    )
    DATABASE_ECHO: bool = Field(default=False, description="Echo SQL queries")

    # =========================
    # Matching Thresholds
    # =========================
    INTENT_MIN_CONFIDENCE: float = Field(
        default=0.5,
        description="Minimum pattern score before the knowledge-base fallback kicks in"
    )
    KB_MATCH_MIN_CONFIDENCE: float = Field(
        default=0.4,
        description="Minimum fuzzy score for an event name lookup"
    )
    KB_FALLBACK_MIN_CONFIDENCE: float = Field(
        default=0.5,
        description="Minimum event match score for the EVENT_DETAILS fallback"
    )
    KB_FALLBACK_DAMPING: float = Field(
        default=0.85,
        description="Multiplier applied to fallback event matches"
    )
    PIPELINE_CONFIDENCE_GATE: float = Field(
        default=0.4,
        description="Intents below this confidence bypass the resolver"
    )

    # =========================
    # Pipeline Settings
    # =========================
    MAX_TRANSCRIPT_LENGTH: int = Field(
        default=500,
        description="Transcripts are truncated to this many characters"
    )
    UPCOMING_EVENTS_LIMIT: int = Field(default=5, description="Upcoming events returned")
    EVENT_SEARCH_LIMIT: int = Field(
        default=5,
        description="Rows fetched when reconciling a spoken name with the event table"
    )
    EVENT_TITLE_MIN_SIMILARITY: float = Field(
        default=0.6,
        description="Minimum title similarity between a bookable row and the matched event"
    )

    # =========================
    # Logging Settings
    # =========================
    LOG_LEVEL: str = Field(default="INFO", description="Logging level")
    ENABLE_COMMAND_LOG: bool = Field(default=True, description="Write the markdown command log")
    COMMAND_LOG_PATH: Path = Field(
        default=Path("./logs/command_log.md"),
        description="Path to the markdown command log"
    )

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
