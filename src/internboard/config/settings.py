"""
Configuration settings for internboard.

Uses pydantic-settings for type-safe configuration from environment variables.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_GEOCODING_URL = "https://nominatim.openstreetmap.org/search"


class Settings(BaseSettings):
    """internboard configuration loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # MongoDB
    mongodb_uri: SecretStr = Field(
        default=SecretStr("mongodb://localhost:27017"),
        description="MongoDB connection URI",
    )
    mongodb_database: str = Field(
        default="internboard",
        description="MongoDB database name",
    )

    # Collections
    posts_collection: str = Field(default="posts", description="Internship posts")
    companies_collection: str = Field(default="companies", description="Companies")
    messages_collection: str = Field(default="messages", description="Forum messages")
    users_collection: str = Field(default="users", description="Users (message authors, students)")
    applications_collection: str = Field(
        default="applications",
        description="Student applications",
    )

    # Geocoding (Nominatim)
    geocoding_url: str = Field(
        default=DEFAULT_GEOCODING_URL,
        description="Geocoding provider search endpoint",
    )
    geocoding_user_agent: str = Field(
        default="internboard-geocoder/0.1",
        description="User-Agent sent to the provider (required by Nominatim)",
    )
    geocoding_timeout_seconds: float = Field(
        default=5.0,
        gt=0.0,
        description="Network timeout for a single geocoding request",
    )
    geocoding_min_interval_seconds: float = Field(
        default=1.0,
        ge=0.0,
        description="Minimum spacing between two outbound geocoding calls",
    )

    # Search and pagination
    search_max_tokens: int = Field(
        default=8,
        ge=1,
        le=32,
        description="Maximum number of free-text search tokens",
    )
    default_page_size: int = Field(
        default=10,
        ge=1,
        description="Page size used when none is requested",
    )
    max_page_size: int = Field(
        default=100,
        ge=1,
        description="Largest page size accepted from requests",
    )

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Log level for the CLI",
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
