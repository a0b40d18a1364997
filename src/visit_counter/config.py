"""Configuration management for the visit counter."""

import os
from functools import lru_cache
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_file=".env" if os.getenv("ENVIRONMENT") != "test" else None,
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Application
    app_name: str = "Visit Counter"
    app_version: str = "0.1.0"
    debug: bool = False
    environment: str = "development"
    log_level: str = "INFO"

    # Server
    host: str = "0.0.0.0"
    port: int = 8000

    # Store
    database_path: str = Field(
        default="visits.db",
        description="SQLite file holding the visits table (':memory:' for a throwaway store)",
    )
    store_timeout: float = Field(
        default=5.0,
        description="Seconds a store call may wait on a locked database before failing",
    )

    # Date derivation
    timezone: Optional[str] = Field(
        default=None,
        description="IANA zone used to derive today's date key. Server-local when unset.",
    )

    health_path: str = "/health"

    @field_validator("store_timeout")
    @classmethod
    def validate_store_timeout(cls, v):
        if v <= 0:
            raise ValueError("store_timeout must be positive")
        return v

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, v):
        if not v:
            return None
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError):
            raise ValueError(f"unknown timezone: {v}")
        return v

    @field_validator("health_path")
    @classmethod
    def validate_health_path(cls, v):
        if not v.startswith("/"):
            return "/" + v
        return v

    def get_database_url(self) -> str:
        """Build the async SQLAlchemy URL for the configured store file."""
        return f"sqlite+aiosqlite:///{self.database_path}"

    def get_log_level(self) -> str:
        return "DEBUG" if self.debug else self.log_level.upper()


@lru_cache()
def get_settings() -> Settings:
    """Get cached application settings."""
    return Settings()
