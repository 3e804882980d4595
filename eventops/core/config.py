"""Application configuration (settings and environment).

Single source of truth for all configuration. Uses pydantic-settings
with .env support. SECRET_KEY is validated at load time; DATABASE_URL is
checked lazily when the first session is requested.
"""

from functools import lru_cache

from pydantic import SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment and .env."""

    # App
    app_name: str = "eventops"
    app_version: str = "1.0.0"
    debug: bool = False

    # Database (SQLAlchemy async + Alembic). Empty URL = SQL not configured.
    database_url: str = ""
    database_echo: bool = False
    db_pool_size: int | None = None
    db_max_overflow: int | None = None
    db_command_timeout: int | None = None
    db_disable_jit: bool = True

    # Security
    secret_key: SecretStr = SecretStr("")
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 480  # 8 hours

    # CORS
    allowed_origins: str = "http://localhost:3000,http://localhost:8080"

    # Tenant
    tenant_header_name: str = "X-Tenant-ID"

    # Request / middleware
    request_id_header: str = "X-Request-ID"
    correlation_id_header: str = "X-Correlation-ID"

    # Workflow automation
    apply_preview_event_limit: int = 10

    # OpenTelemetry
    telemetry_enabled: bool = False
    telemetry_exporter: str = "console"
    telemetry_otlp_endpoint: str | None = None
    telemetry_sample_rate: float = 1.0
    telemetry_environment: str = "development"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @model_validator(mode="after")
    def validate_required(self) -> "Settings":
        """Require SECRET_KEY and a known telemetry exporter."""
        if not self.secret_key.get_secret_value():
            raise ValueError(
                "SECRET_KEY is required. Generate with: openssl rand -hex 32."
            )
        if self.telemetry_exporter not in ("console", "otlp", "none"):
            raise ValueError(
                f"telemetry_exporter must be 'console', 'otlp' or 'none', "
                f"got: {self.telemetry_exporter!r}"
            )
        return self


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings (single instance per process).

    Validation runs on first call, not at import time. In tests, call
    get_settings.cache_clear() before overriding env vars so the next
    get_settings() uses the new values.
    """
    return Settings()
