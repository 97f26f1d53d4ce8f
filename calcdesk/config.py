"""
Application configuration using Pydantic Settings.
"""

import os
from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings


def get_env_file() -> str:
    """Determine which env file to use based on environment."""
    env = os.getenv("APP_ENV", "development")
    if env == "production":
        return ".env.production"
    return ".env.development"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # App settings
    app_name: str = "Calcdesk"
    debug: bool = False
    log_level: str = "INFO"
    app_env: str = "development"

    # Server
    host: str = "0.0.0.0"
    port: int = 8000

    # Reference data (defaults to the tables packaged with calcdesk)
    tax_tables_path: Optional[str] = None
    cpi_data_path: Optional[str] = None

    # Presentation
    currency_decimals: int = 2

    class Config:
        env_file = get_env_file()
        env_file_encoding = "utf-8"
        extra = "ignore"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
