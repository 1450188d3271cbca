"""Application configuration."""

from pathlib import Path
from typing import Literal

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Storage
    storage_backend: Literal["json", "mongodb"] = "json"
    data_dir: Path = Path("data")
    mongodb_uri: str = "mongodb://localhost:27017"
    mongodb_database: str = "booking"

    # Logging
    environment: Literal["development", "production"] = "development"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    # Cache (maxsize 0 disables it)
    cache_maxsize: int = 256
    cache_ttl_closed: int = 3600  # TTL for periods that already ended (seconds)
    cache_ttl_open: int = 60  # TTL for open/current periods (seconds)

    model_config = {"env_prefix": "BOOKING_ANALYTICS_"}


settings = Settings()
