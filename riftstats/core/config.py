"""Configuration settings for the riftstats engine."""

from __future__ import annotations

from typing import Optional

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load environment variables from .env file
load_dotenv()


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Riot API Configuration
    riot_api_key: str = Field(default="dev_api_key")
    riot_api_host_template: str = Field(default="https://{}.api.riotgames.com")
    request_timeout: float = Field(default=10.0, gt=0)

    # Application Configuration
    debug: bool = Field(default=False)
    log_level: str = Field(default="INFO")

    # Cache Configuration
    cache_max_entries: int = Field(default=1000, ge=1)
    cache_coalesce_misses: bool = Field(
        default=False,
        description="Share one upstream fetch between concurrent identical misses",
    )

    # Fan-out Configuration
    match_fetch_concurrency: int = Field(default=6, ge=1)
    aggregation_timeout: Optional[float] = Field(
        default=None,
        gt=0,
        description="Overall timeout in seconds for one match summary aggregation",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        env_prefix="",  # No prefix for environment variables
        extra="ignore",
    )


def get_settings() -> Settings:
    """Get application settings instance."""
    return Settings()


# Create a global settings instance lazily
settings: Settings | None = None


def get_global_settings() -> Settings:
    """Get or create the global settings instance."""
    global settings
    if settings is None:
        settings = get_settings()
    return settings
