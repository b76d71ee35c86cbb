"""Application configuration."""

import os
from zoneinfo import ZoneInfo

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    api_token: str
    openai_api_key: str
    openai_model: str = "gpt-4.1-mini"
    openai_text_model: str = "gpt-4.1-mini"
    openai_store: bool = False
    openfoodfacts_base_url: str = "https://world.openfoodfacts.org/api/v2"
    openfoodfacts_user_agent: str = "SnackTrack - Food Tracker"
    timezone: str = "UTC"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    @field_validator("timezone")
    @classmethod
    def _check_timezone(cls, value: str) -> str:
        if not is_valid_timezone(value):
            raise ValueError(f"Unknown timezone: {value}")
        return value


def is_valid_timezone(value: str) -> bool:
    """Return True when the value names a known IANA timezone."""
    try:
        ZoneInfo(value)
    except Exception:
        return False
    return True
