"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    supabase_foods_table: str = "foods"
    off_base_url: str = "https://world.openfoodfacts.org"
    off_timeout_seconds: float = 10.0
    off_user_agent: str = "SmartFood/0.1 (+https://github.com/smartfood/smartfood)"
    fallback_serving_grams: float = 100.0
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )
