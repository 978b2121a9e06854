"""Configuration management using Pydantic settings."""

from datetime import date

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .targets import PORTAL_BASE_URL, STATIC_BASE_URL


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Slov-Lex source
    static_base_url: str = Field(
        default=STATIC_BASE_URL,
        description="Base URL of the static Slov-Lex statute pages (history and dated versions)",
    )
    portal_base_url: str = Field(
        default=PORTAL_BASE_URL,
        description="Base URL of the public Slov-Lex portal, used for canonical act URLs",
    )

    # HTTP fetch
    user_agent: str = Field(
        default="slovlex-ingest/0.1 (legal data pipeline)",
        description="User-Agent header sent with every request",
    )
    request_min_interval_seconds: float = Field(
        default=1.2,
        ge=0.0,
        le=60.0,
        description="Minimum spacing between consecutive requests",
    )
    request_max_retries: int = Field(
        default=3,
        ge=0,
        le=10,
        description="Retries after HTTP 429 or 5xx before giving up",
    )
    request_backoff_base_seconds: float = Field(
        default=2.0,
        ge=0.0,
        le=60.0,
        description="Delay before the first retry; doubles on each further retry",
    )
    request_timeout_seconds: float = Field(
        default=60.0,
        gt=0.0,
        description="Per-request timeout",
    )

    # Storage
    source_dir: str = Field(
        default="data/source",
        description="Directory for cached raw history/version pages",
    )
    seed_dir: str = Field(
        default="data/seed",
        description="Directory for exported act JSON files",
    )

    # Version selection
    as_of_date: str | None = Field(
        default=None,
        description="Reference date (YYYY-MM-DD) for version selection; defaults to today",
    )

    model_config = SettingsConfigDict(
        env_prefix="SLOVLEX_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("as_of_date")
    @classmethod
    def validate_as_of_date(cls, v: str | None) -> str | None:
        """Validate that the reference date is an ISO calendar date."""
        if v is None or v.strip() == "":
            return None
        v = v.strip()
        try:
            parsed = date.fromisoformat(v)
        except ValueError as e:
            raise ValueError(f"SLOVLEX_AS_OF_DATE must be YYYY-MM-DD, got {v!r}") from e
        # Version selection compares dates as fixed-width strings.
        if parsed.isoformat() != v:
            raise ValueError(f"SLOVLEX_AS_OF_DATE must be YYYY-MM-DD, got {v!r}")
        return v

    def resolve_as_of_date(self) -> str:
        """Configured reference date, or today's date."""
        return self.as_of_date or date.today().isoformat()


# Singleton instance
_settings_instance: Settings | None = None


def get_settings() -> Settings:
    """
    Get application settings instance (singleton pattern).

    Returns:
        Settings instance (cached after first call)
    """
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = Settings()
    return _settings_instance
