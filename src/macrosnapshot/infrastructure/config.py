"""Application settings.

Only transport and logging knobs live here. The FRED API key is supplied per
call through the environment object handed to the aggregator and is never read
from process settings.
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class Settings(BaseSettings):
    """macrosnapshot runtime configuration (``MACROSNAPSHOT_*`` variables)."""

    model_config = SettingsConfigDict(
        env_prefix="MACROSNAPSHOT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    fred_base_url: str = Field(default="https://api.stlouisfed.org/fred")
    fred_timeout_seconds: float = Field(default=30.0)
    log_level: str = Field(default="INFO")
    log_json: bool = Field(default=False)

    @field_validator("fred_timeout_seconds")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        """Validate timeout is positive."""
        if v <= 0:
            raise ValueError("fred_timeout_seconds must be positive")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Normalise and validate the log level name."""
        level = v.upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {sorted(_LOG_LEVELS)}")
        return level


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
