"""Configuration management for Scripture Store."""

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings, loaded from environment and .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="SCRIPTURE_",
    )

    # Paths
    bibles_dir: Path = Field(default=Path("data/bibles"), description="Directory of translation JSON files")

    # Query defaults
    default_translation: str = Field(default="kjv")
    search_limit: int = Field(default=50, description="Results returned when no limit is given")
    max_search_limit: int = Field(default=500, description="Upper bound applied to caller-supplied limits")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
