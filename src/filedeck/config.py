"""Configuration for filedeck.

Settings come from (highest priority first):
1. Keyword arguments / CLI overrides
2. Environment variables (FILEDECK_ prefix)
3. A ``.env`` file in the working directory
4. Defaults
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Client settings."""

    model_config = SettingsConfigDict(
        env_prefix="FILEDECK_",
        env_file=".env",
        extra="ignore",
    )

    api_base: str = Field(
        default="http://localhost:8080/api",
        description="Base URL of the items API (without trailing /items)",
    )
    request_timeout: float = Field(default=30.0, gt=0)
    download_timeout: float = Field(default=120.0, gt=0)
    download_dir: Path = Field(default_factory=lambda: Path.home() / ".filedeck" / "downloads")

    # Drop listing/path responses that belong to a superseded navigation.
    discard_stale_responses: bool = False

    log_level: str = "INFO"

    @field_validator("api_base")
    @classmethod
    def _strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    @field_validator("download_dir")
    @classmethod
    def _expand_user(cls, v: Path) -> Path:
        return v.expanduser()

    @field_validator("log_level")
    @classmethod
    def _upper_level(cls, v: str) -> str:
        return v.upper()


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings (cached)."""
    return Settings()
