"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    admin_token: str
    cors_allowed_origins: str = "*"
    stream_page_size: int = 50
    stream_page_size_max: int = 100
    trending_limit: int = 10
    host: str = "0.0.0.0"  # noqa: S104
    port: int = 8000
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def parse_allowed_origins(raw: str | None) -> list[str] | str:
    """Parse allowed CORS origins from env."""
    if raw is None:
        return "*"
    cleaned = raw.strip()
    if cleaned in {"", "*"}:
        return "*"
    origins = [chunk.strip() for chunk in cleaned.split(",") if chunk.strip()]
    return origins or "*"
