"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    openai_api_key: str | None = None
    openai_model: str = "gpt-5.2"
    openai_store: bool = False
    classifier_backend: str = "openai"
    huggingface_api_key: str | None = None
    huggingface_model_url: str = (
        "https://api-inference.huggingface.co/models/nateraw/food"
    )
    default_timezone: str = "UTC"
    default_daily_goal: int = 2000
    max_upload_bytes: int = 5 * 1024 * 1024
    log_level: str = "INFO"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )
