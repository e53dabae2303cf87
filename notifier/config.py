"""Application configuration settings."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_FILE = ".env"
ENV_FILE_ENCODING = "utf-8"

EXPO_PUSH_URL = "https://exp.host/--/api/v2/push/send"


class Settings(BaseSettings):
    """Application configuration values loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=ENV_FILE, env_file_encoding=ENV_FILE_ENCODING, extra="ignore"
    )

    database_url: str = Field(
        description="Database connection URL used by SQLAlchemy to connect to the DB",
        min_length=1,
    )
    secret_key: str = Field(
        description="Shared secret used to verify the JWT bearer tokens issued by the auth service",
        min_length=1,
    )
    app_timezone: str = Field(
        default="UTC",
        description="Timezone used when persisting and presenting timestamps",
    )
    log_level: str = Field(default="INFO", description="Root logging level")

    push_enabled: bool = Field(
        default=True,
        description="When false, push sends are logged and dropped instead of reaching Expo",
    )
    expo_push_url: str = Field(
        default=EXPO_PUSH_URL,
        description="Endpoint of the Expo push notification API",
        min_length=1,
    )
    expo_access_token: str | None = Field(
        default=None,
        description="Optional Expo access token required when enhanced push security is enabled",
    )
    push_timeout_seconds: float = Field(
        default=10.0,
        description="Timeout applied to every push provider request",
        gt=0,
    )
    dispatch_concurrency: int = Field(
        default=10,
        description="Maximum number of concurrent store calls and push sends per dispatch",
        gt=0,
    )
    preferences_cache_ttl_seconds: float = Field(
        default=300.0,
        description="Lifetime of cached notification preferences",
        ge=0,
    )
    deep_link_scheme: str = Field(
        default="theconnection",
        description="URL scheme used to build the deep links sent with push messages",
        min_length=1,
    )

    reminder_scheduler_enabled: bool = Field(
        default=True,
        description="Start the event reminder scheduler together with the API",
    )
    reminder_interval_seconds: float = Field(
        default=3600.0,
        description="Seconds between two event reminder scans",
        gt=0,
    )
    reminder_lookahead_hours: float = Field(
        default=24.0,
        description="Events starting within this many hours receive a reminder",
        gt=0,
    )

    @model_validator(mode="after")
    def _validate_log_level(self) -> "Settings":
        self.log_level = self.log_level.upper()
        if self.log_level not in {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}:
            raise ValueError("LOG_LEVEL must be a standard logging level name")
        return self


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings instance."""

    return Settings()


def reset_settings_cache() -> None:
    """Clear the settings cache to force reloading from the environment."""

    get_settings.cache_clear()


__all__ = ["EXPO_PUSH_URL", "Settings", "get_settings", "reset_settings_cache"]
