"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")

DEFAULT_FRONTEND_URL = "http://localhost:8083"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    cloudinary_cloud_name: str
    cloudinary_api_key: str
    cloudinary_api_secret: str
    cloudinary_base_url: str = "https://api.cloudinary.com/v1_1"
    gallery_prefix: str = "zenith-villa-gallery"
    max_results: int = 100
    upstream_timeout_seconds: float = 15.0
    frontend_url: str = DEFAULT_FRONTEND_URL
    port: int = 3000
    log_level: str = "INFO"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def parse_allowed_origins(raw: str | None) -> list[str]:
    """Parse the comma-separated list of CORS origins from env."""
    if raw is None:
        return [DEFAULT_FRONTEND_URL]
    origins: list[str] = []
    for chunk in raw.split(","):
        value = chunk.strip().rstrip("/")
        if value and value not in origins:
            origins.append(value)
    return origins or [DEFAULT_FRONTEND_URL]
