"""Application configuration (settings and environment).

Single source of truth for all configuration. Uses pydantic-settings
with .env support. Required fields (DATABASE_URL) are validated at load
time. Legal constants live in recordvault.core.constants, not here.
"""

from functools import lru_cache

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment and .env."""

    # App
    app_name: str = "recordvault"
    app_version: str = "1.0.0"
    debug: bool = False

    # Database
    database_url: str = ""
    database_echo: bool = False
    # Optional pool overrides (None = use defaults in database.py)
    db_pool_size: int | None = None
    db_max_overflow: int | None = None

    # CORS
    allowed_origins: str = "http://localhost:3000,http://localhost:8080"

    # Storage
    storage_root: str = "/var/recordvault/storage"
    max_upload_size: int = 50 * 1024 * 1024  # 50MB
    allowed_mime_types: str = (
        "application/pdf,image/png,image/jpeg,image/jpg,image/tiff"
    )

    # OCR enrichment (extraction engine is external)
    ocr_enabled: bool = True

    # Rate limiting (slowapi)
    rate_limit_enabled: bool = True

    # Request / identity
    actor_header_name: str = "X-User-ID"
    request_id_header: str = "X-Request-ID"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @model_validator(mode="after")
    def validate_required(self) -> "Settings":
        """Validate required env and upload limits."""
        if not self.database_url:
            raise ValueError(
                "DATABASE_URL is required. Set in environment or .env file."
            )
        if self.max_upload_size <= 0:
            raise ValueError(
                f"max_upload_size must be positive, got: {self.max_upload_size}"
            )
        return self

    @property
    def allowed_mime_type_set(self) -> frozenset[str]:
        """Allowed MIME types as a normalized set."""
        return frozenset(
            m.strip().lower() for m in self.allowed_mime_types.split(",") if m.strip()
        )

    @property
    def allowed_origin_list(self) -> list[str]:
        return [o.strip() for o in self.allowed_origins.split(",") if o.strip()]


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings (single instance per process).

    Validation runs on first call, not at import time. In tests, call
    get_settings.cache_clear() before overriding env vars so the next
    get_settings() uses the new values.

    Returns:
        Loaded and validated Settings instance.
    """
    return Settings()
