"""
Runtime Environment Validation Module

This module validates all required environment variables at application startup.
If validation fails, the application will refuse to start (hard fail).

This prevents runtime errors from missing or misconfigured environment variables.
"""

import os
import sys
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict


class ProductionSettings(BaseSettings):
    """
    Strict validation schema for production environment variables.

    All required fields MUST be present and valid, or the application will not start.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ========================================================================
    # CRITICAL: Database Configuration
    # ========================================================================
    database_url: str  # REQUIRED: PostgreSQL connection string

    # ========================================================================
    # CRITICAL: Firebase Authentication
    # ========================================================================
    firebase_project_id: str  # REQUIRED: Firebase project ID
    google_application_credentials: Optional[str] = None  # Path to service account JSON

    # ========================================================================
    # Application Configuration
    # ========================================================================
    app_name: str = "RentEase API"
    debug: bool = False
    api_v1_prefix: str = "/v1"
    log_level: str = "INFO"

    # ========================================================================
    # CRITICAL: CORS Configuration
    # ========================================================================
    allowed_origins: str  # REQUIRED: Comma-separated list of allowed origins

    # ========================================================================
    # Expired lease sweep
    # ========================================================================
    lease_sweep_enabled: bool = True
    lease_sweep_hour: int = 0
    lease_sweep_minute: int = 0
    lease_sweep_timezone: str = "UTC"


def _fail(message: str, hint: Optional[str] = None) -> None:
    print(f"❌ FATAL: {message}", file=sys.stderr)
    if hint:
        print(f"   {hint}", file=sys.stderr)
    sys.exit(1)


def validate_environment() -> ProductionSettings:
    """
    Validate all required environment variables at startup.

    This function MUST be called before the FastAPI app starts.
    If validation fails, the application will exit with code 1.

    Returns:
        ProductionSettings: Validated settings object

    Raises:
        SystemExit: If validation fails (exit code 1)
    """

    try:
        settings = ProductionSettings()
    except ValidationError as e:
        print("❌ FATAL: Environment validation failed", file=sys.stderr)
        print("\nMissing or invalid environment variables:", file=sys.stderr)
        for error in e.errors():
            field = " -> ".join(str(loc) for loc in error["loc"])
            msg = error["msg"]
            print(f"   • {field}: {msg}", file=sys.stderr)

        print("\nThe application cannot start with invalid configuration.", file=sys.stderr)
        print("Please check your .env file or environment variables.", file=sys.stderr)
        sys.exit(1)

    # ====================================================================
    # Additional Production-Specific Validation
    # ====================================================================

    # 1. CORS: Ensure wildcard is not used in production
    if not settings.debug:
        origins = [o.strip() for o in settings.allowed_origins.split(",")]
        if "*" in origins:
            _fail(
                "Wildcard CORS origin (*) detected in production mode.",
                "Set ALLOWED_ORIGINS to specific domains (comma-separated).",
            )

    # 2. Firebase: Validate credentials path exists (if provided)
    if settings.google_application_credentials:
        if not os.path.exists(settings.google_application_credentials):
            _fail(f"Firebase credentials file not found: {settings.google_application_credentials}")

    # 3. Database URL: PostgreSQL in production, SQLite tolerated in debug
    allowed_schemes = ("postgresql", "sqlite") if settings.debug else ("postgresql",)
    if not settings.database_url.startswith(allowed_schemes):
        _fail(
            "DATABASE_URL must be a PostgreSQL connection string (postgresql+asyncpg://)",
            "SQLite (sqlite+aiosqlite://) is only accepted when DEBUG=true.",
        )

    # 4. Lease sweep schedule
    if not 0 <= settings.lease_sweep_hour <= 23 or not 0 <= settings.lease_sweep_minute <= 59:
        _fail(
            f"Invalid lease sweep time {settings.lease_sweep_hour}:{settings.lease_sweep_minute}",
            "LEASE_SWEEP_HOUR must be 0-23 and LEASE_SWEEP_MINUTE 0-59.",
        )
    try:
        ZoneInfo(settings.lease_sweep_timezone)
    except (ZoneInfoNotFoundError, ValueError):
        _fail(f"Unknown LEASE_SWEEP_TIMEZONE '{settings.lease_sweep_timezone}'")

    # ====================================================================
    # Success: Log validated configuration
    # ====================================================================
    print("✅ Environment validation passed")
    print(f"   App: {settings.app_name}")
    print(f"   Debug: {settings.debug}")
    print(f"   CORS Origins: {settings.allowed_origins}")
    print(
        f"   Lease sweep: {'enabled' if settings.lease_sweep_enabled else 'disabled'} "
        f"({settings.lease_sweep_hour:02d}:{settings.lease_sweep_minute:02d} {settings.lease_sweep_timezone})"
    )

    return settings


if __name__ == "__main__":
    # Allow running this module directly to test validation
    validate_environment()
    print("\n✅ All environment variables are valid!")
