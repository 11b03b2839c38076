"""Application configuration loaded from environment variables."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime settings. Every field can be overridden with ``HATCHCAST_<NAME>``."""

    model_config = SettingsConfigDict(env_prefix="HATCHCAST_", env_file=".env", extra="ignore")

    app_name: str = "hatchcast"
    app_env: str = "development"
    debug: bool = False
    log_level: str = "INFO"

    # Root of the JSON data store (file cache + derived snapshots)
    data_dir: Path = Path("data")
    cache_backend: Literal["memory", "file"] = "memory"

    # Top picks
    concurrency: int = 6
    top_n: int = 5
    tolerate_weather_errors: bool = False

    # Upstream HTTP
    http_timeout: float = 10.0


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings instance."""
    return Settings()
