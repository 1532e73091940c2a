"""
Configuration Management

Uses Pydantic Settings for environment-based configuration.
Loads from .env file automatically.
"""

from functools import lru_cache
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Core settings loaded from environment."""

    # Reference data selection
    EMISSION_FACTOR_DATASET: str = "uk_2024"
    DEFAULT_BUSINESS_TYPE: str = "other"

    # Score reported when a footprint cannot be benchmarked
    NEUTRAL_SCORE: int = 50

    # Application Settings
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"  # Ignore extra fields in .env file
        case_sensitive = False  # Allow both UPPERCASE and lowercase


@lru_cache
def get_settings() -> Settings:
    """Get or create cached settings instance."""
    return Settings()
