"""Pydantic settings configuration for the portal."""

from enum import Enum
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class LogLevel(str, Enum):
    """Valid logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="PORTAL_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Server settings
    host: str = "0.0.0.0"
    port: int = 8080
    log_level: LogLevel = LogLevel.INFO

    # Demo accounts and static assets
    accounts_path: str = "config/accounts.yaml"
    static_dir: str | None = None  # None serves the assets packaged with portal

    # Session cookie settings
    session_cookie_name: str = "session_id"
    session_cookie_max_age: int = 86400  # one day

    # Cost estimation range: [cost_min, cost_min + cost_span)
    cost_min: int = 150_000
    cost_span: int = Field(default=100_000, gt=0)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
