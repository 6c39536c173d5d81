"""Application configuration using pydantic-settings."""

from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Application
    app_name: str = "Bosun NMEA Service"
    environment: Literal["development", "testing", "staging", "production"] = "development"
    debug: bool = True
    log_level: str = "INFO"

    # NMEA source
    nmea_source: Literal["tcp", "sample"] = "sample"
    nmea_address: str = "192.168.1.1:10110"
    sample_interval_seconds: float = 0.5
    sources_config_file: str = ""  # e.g. config/nmea_sources.yaml

    # Decoder bounds
    ais_target_ttl_seconds: int = 0
    fragment_ttl_seconds: float = 60.0
    max_pending_fragments: int = 10
    log_max_entries: int = 65536

    # CORS
    cors_origins: list[str] = ["http://localhost:3000", "http://127.0.0.1:3000"]


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
