"""Application configuration."""

import os
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")

MAX_UPLOAD_BYTES = 25 * 1024 * 1024


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    host: str = "127.0.0.1"
    port: int = 3000
    admin_token: str | None = None
    uploads_dir: Path = Path("uploads")
    photos_json_path: Path = Path("photos.json")
    uploads_enabled: bool = True
    public_upload_requires_auth: bool = True
    max_upload_bytes: int = MAX_UPLOAD_BYTES
    photo_timezone: str = "UTC"
    log_level: str = "INFO"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def resolve_admin_token(raw: str | None) -> str | None:
    """Return the configured admin token, treating blank values as unset."""
    if raw is None:
        return None
    cleaned = raw.strip()
    return cleaned or None
