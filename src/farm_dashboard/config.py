"""Application configuration."""

import os
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

from farm_dashboard.services.export import CsvStyle

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    storage_dir: str = ".farm-dashboard"
    storage_backend: Literal["file", "memory"] = "file"
    cache_ttl_seconds: int = 300
    mock_latency_seconds: float = 0.3
    csv_style: CsvStyle = CsvStyle.RFC4180
    log_level: str = "INFO"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_prefix="FARM_",
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )
