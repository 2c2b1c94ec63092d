"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")

DEFAULT_DINING_API_URL = "https://now.dining.cornell.edu/api/1.0/dining/eateries.json"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    admin_token: str
    dining_api_url: str = DEFAULT_DINING_API_URL
    openai_api_key: str | None = None
    openai_model: str = "gpt-4.1-mini"
    openai_store: bool = False
    menu_freshness_hours: float = 6
    recommendation_days: int = 7
    log_level: str = "INFO"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )
