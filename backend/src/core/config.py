"""Application configuration using pydantic-settings."""
from functools import lru_cache

from pydantic import AliasChoices, Field, ValidationInfo, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    # Supabase - shared with the original frontend (VITE_ prefix accepted)
    supabase_url: str = Field(
        validation_alias=AliasChoices("SUPABASE_URL", "VITE_SUPABASE_URL", "supabase_url"),
    )
    supabase_anon_key: str = Field(
        validation_alias=AliasChoices(
            "SUPABASE_ANON_KEY", "VITE_SUPABASE_ANON_KEY", "supabase_anon_key",
        ),
    )

    app_name: str = Field(default="NoteKeeper", validation_alias="APP_NAME")

    # Browser session cookie
    session_cookie_name: str = Field(
        default="notekeeper_session", validation_alias="SESSION_COOKIE_NAME",
    )
    session_cookie_secure: bool = Field(
        default=False, validation_alias="SESSION_COOKIE_SECURE",
    )
    # Seconds a browser session may sit idle before it is closed
    session_idle_timeout: int = Field(
        default=3600, gt=0, validation_alias="SESSION_IDLE_TIMEOUT",
    )

    health_check_timeout: float = Field(
        default=5.0, gt=0, validation_alias="HEALTH_CHECK_TIMEOUT",
    )
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")

    @field_validator("supabase_url", "supabase_anon_key")
    @classmethod
    def require_non_blank(cls, v: str, info: ValidationInfo) -> str:
        """Reject credentials that are present but empty."""
        v = v.strip()
        if not v:
            raise ValueError(f"{info.field_name} must not be empty")
        return v

    @field_validator("supabase_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Normalize the endpoint so paths can be appended."""
        return v.rstrip("/")

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        """Log levels are matched case-insensitively."""
        return v.upper()


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
