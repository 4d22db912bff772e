"""Application configuration using Pydantic settings."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # data.police.uk API
    police_api_base_url: str = "https://data.police.uk/api"
    force: str = "metropolitan"
    dates_category: str = "stop-and-search"

    # Collection settings
    request_timeout_seconds: float = 10.0
    request_delay_seconds: float = 0.5  # Fixed gap between monthly requests
    months_window: int = 12
    refresh_interval_minutes: int = 360
    refresh_on_startup: bool = True

    # Dashboard defaults
    items_per_page: int = 20

    # API settings
    api_v1_prefix: str = "/api/v1"
    cors_origins: list[str] = ["*"]  # Restrict in production
    rate_limit_per_minute: int = 60
    cache_control: str = "public, s-maxage=3600, stale-while-revalidate=86400"

    # Environment
    debug: bool = False


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
