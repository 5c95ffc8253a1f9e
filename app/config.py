# =============================================================================
# app/config.py - Application Settings
# =============================================================================
# Configuration for the practicum admin API, read from the environment (and
# a .env file in the project root when present) by pydantic-settings.
#
# Usage:
#   from app.config import settings
#   settings.MAX_PAGE_SIZE
#
# Values are validated once at import, so a missing Supabase key stops the
# app at startup instead of on the first request.
# =============================================================================

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings for the API, the list screens and consultation attachments."""

    # -------------------------------------------------------------------------
    # Supabase
    # -------------------------------------------------------------------------
    # URL and both keys are required

    SUPABASE_URL: str = Field(
        ...,
        description="Project URL, https://<ref>.supabase.co"
    )

    SUPABASE_ANON_KEY: str = Field(
        ...,
        description="Public key used by the admin console and application form"
    )

    SUPABASE_SERVICE_KEY: str = Field(
        ...,
        description="service_role key; the API reads and writes past RLS with it"
    )

    SUPABASE_JWT_SECRET: str = Field(
        default="",
        description="HS256 secret for access tokens not signed with a JWKS key"
    )

    # -------------------------------------------------------------------------
    # Server
    # -------------------------------------------------------------------------

    ENVIRONMENT: Literal["development", "staging", "production"] = Field(
        default="development",
        description="Deployment environment"
    )

    DEBUG: bool = Field(
        default=False,
        description="DEBUG-level logging and auto-reload"
    )

    API_HOST: str = Field(default="0.0.0.0", description="Bind address")

    API_PORT: int = Field(default=8000, ge=1, le=65535, description="Bind port")

    # Comma-separated; only enforced in production
    CORS_ORIGINS: str = Field(
        default="http://localhost:3000",
        description="Origins allowed to call the API"
    )

    # -------------------------------------------------------------------------
    # List Screens
    # -------------------------------------------------------------------------

    DEFAULT_PAGE_SIZE: int = Field(
        default=10,
        ge=1,
        le=100,
        description="Rows per page on admin list screens"
    )

    MAX_PAGE_SIZE: int = Field(
        default=100,
        ge=1,
        le=1000,
        description="Largest page size a client may request"
    )

    # -------------------------------------------------------------------------
    # Consultation Attachments
    # -------------------------------------------------------------------------

    CONSULTATION_FILES_BUCKET: str = Field(
        default="consultation-files",
        description="Supabase Storage bucket for consultation attachments"
    )

    MAX_UPLOAD_SIZE_MB: int = Field(
        default=10,
        ge=1,
        le=100,
        description="Maximum attachment size in MB"
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        case_sensitive=True,
    )

    @property
    def cors_origins_list(self) -> list[str]:
        """
        Example: "http://localhost:3000, https://admin.example.com"
            -> ["http://localhost:3000", "https://admin.example.com"]
        """
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

    @property
    def max_upload_size_bytes(self) -> int:
        return self.MAX_UPLOAD_SIZE_MB * 1024 * 1024

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT == "production"


@lru_cache
def get_settings() -> Settings:
    """Parse and validate the environment once."""
    return Settings()


settings = get_settings()
