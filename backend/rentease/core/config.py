"""Application configuration using Pydantic Settings."""

from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # App
    app_name: str = "RentEase API"
    debug: bool = False
    api_v1_prefix: str = "/v1"
    allowed_origins: str = "http://localhost:3000"
    log_level: str = "INFO"

    # Database
    database_url: str
    sql_echo: bool = False

    # Firebase Auth
    firebase_project_id: str
    google_application_credentials: Optional[str] = None

    # Expired lease sweep (cron fields, evaluated in lease_sweep_timezone)
    lease_sweep_enabled: bool = True
    lease_sweep_hour: int = 0
    lease_sweep_minute: int = 0
    lease_sweep_timezone: str = "UTC"

    @property
    def cors_origins(self) -> list[str]:
        """Allowed CORS origins as a list."""
        return [origin.strip() for origin in self.allowed_origins.split(",") if origin.strip()]


@lru_cache
def get_settings() -> Settings:
    """Cached settings instance."""
    return Settings()
