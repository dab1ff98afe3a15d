"""Application configuration with environment validation.

Usage:
    from wvruns.config import get_settings

    settings = get_settings()
    print(settings.store_backend)

Settings come from environment variables or a .env file in the working
directory. The store backend decides where records live:

    STORE_BACKEND=memory    # throwaway, per-process (tests, demos)
    STORE_BACKEND=json      # single JSON document at DATA_FILE
    STORE_BACKEND=supabase  # SUPABASE_URL + SUPABASE_KEY tables
"""

from enum import StrEnum
from functools import lru_cache
from pathlib import Path

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Environment(StrEnum):
    """Application environment."""

    LOCAL = "local"
    DEVELOPMENT = "development"
    PRODUCTION = "production"


class LogFormat(StrEnum):
    """Log output format."""

    CONSOLE = "console"
    JSON = "json"


class StoreBackend(StrEnum):
    """Where canonical records are kept."""

    MEMORY = "memory"
    JSON = "json"
    SUPABASE = "supabase"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Environment
    environment: Environment = Environment.LOCAL

    # Storage
    store_backend: StoreBackend = Field(
        default=StoreBackend.JSON, description="Backend holding canonical records"
    )
    data_file: Path = Field(
        default=Path("wvruns-data.json"), description="JSON store location"
    )

    # Supabase (only needed for the supabase backend)
    supabase_url: str | None = Field(default=None, description="Supabase project URL")
    supabase_key: SecretStr | None = Field(default=None, description="Supabase API key")

    # Logging
    log_level: str = Field(default="INFO", description="Log level")
    log_format: LogFormat = Field(default=LogFormat.CONSOLE, description="Log output format")

    @property
    def is_local(self) -> bool:
        """Check if running in local environment."""
        return self.environment == Environment.LOCAL

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == Environment.PRODUCTION


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings.

    Settings are loaded once and cached. To reload, clear the cache:
        get_settings.cache_clear()
    """
    return Settings()
