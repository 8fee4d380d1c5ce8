"""Application configuration."""

import os
from datetime import date
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    sheet_url: str | None = None
    height_cm: float = 175.0
    min_allowed_date: date = date(2025, 12, 22)
    timezone: str = "UTC"
    settings_path: Path = Path("kbju_settings.json")
    supabase_url: str | None = None
    supabase_service_key: str | None = None
    request_timeout_seconds: float = 30
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_prefix="KBJU_",
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    @property
    def uses_supabase(self) -> bool:
        """Return True when settings should be stored in Supabase."""
        return bool(self.supabase_url and self.supabase_service_key)
