"""
Configuration module - centralized settings for the entire application.
Uses pydantic-settings to load values from environment variables and .env file.
"""

from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Pydantic-settings automatically:
    1. Reads from environment variables (highest priority)
    2. Falls back to .env file values
    3. Uses default values if neither exists

    To override in production, set environment variables:
        export DATABASE_URL=sqlite:////var/lib/webmaker/webmaker.db
        export GENERATION_API_URL=https://generator.internal/api/generate
    """

    # ---------------------------------------------------------------------------
    # PYDANTIC SETTINGS CONFIGURATION
    # ---------------------------------------------------------------------------
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ---------------------------------------------------------------------------
    # APPLICATION SETTINGS
    # ---------------------------------------------------------------------------
    # APP_NAME: Display name shown in API docs and logging
    APP_NAME: str = "Webmaker"

    # DEBUG: Enable debug mode (more verbose logging)
    DEBUG: bool = False

    # LOG_LEVEL: Level for the "webmaker" logger tree
    LOG_LEVEL: str = "INFO"

    # ---------------------------------------------------------------------------
    # PERSISTENCE SETTINGS
    # ---------------------------------------------------------------------------
    # DATABASE_URL: SQLAlchemy URL of the key-value store
    # - An empty string disables persistence (in-memory store, lost on restart)
    DATABASE_URL: str = "sqlite:///./webmaker.db"

    # STORAGE_NAMESPACE: Prefix of every persisted key ("aiwm/spec", ...)
    STORAGE_NAMESPACE: str = "aiwm"

    # HISTORY_LIMIT: Maximum number of generations kept in history
    HISTORY_LIMIT: int = 20

    # ---------------------------------------------------------------------------
    # REMOTE GENERATION SERVICE
    # ---------------------------------------------------------------------------
    # GENERATION_API_URL: Endpoint receiving {"spec": ...} and answering
    # {"html": ..., "downloadUrl": ...}
    GENERATION_API_URL: str = "http://localhost:8080/api/generate"

    # GENERATION_TIMEOUT: Seconds before the remote call is abandoned
    # - None keeps the transport default
    GENERATION_TIMEOUT: Optional[float] = None

    # ---------------------------------------------------------------------------
    # ARTIFACTS
    # ---------------------------------------------------------------------------
    # ARTIFACT_URL_PREFIX: Path under which locally built artifacts are served
    ARTIFACT_URL_PREFIX: str = "/artifacts"


# ---------------------------------------------------------------------------
# GLOBAL SETTINGS INSTANCE
# ---------------------------------------------------------------------------
# Usage: from webmaker.core.config import settings
settings = Settings()
