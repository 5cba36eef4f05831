"""Configuration management using Pydantic Settings."""

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application settings
    app_name: str = Field(
        default="RecipeBox",
        description="Application name",
    )
    app_version: str = Field(
        default="0.3.0",
        description="Application version",
    )
    debug: bool = Field(
        default=False,
        description="Debug mode",
    )
    cors_allowed_origins: Optional[str] = Field(
        default=None,
        description="Comma-separated list of allowed CORS origins",
    )

    # MongoDB settings
    mongodb_uri: str = Field(
        default="mongodb://localhost:27017",
        description="MongoDB connection URI",
    )
    mongodb_database: str = Field(
        default="recipebox",
        description="MongoDB database name",
    )
    recipes_collection: str = Field(
        default="recipes",
        description="MongoDB collection holding recipe documents",
    )

    # Duplicate detection settings
    duplicate_check_threshold: float = Field(
        default=0.7,
        ge=0.0,
        le=1.0,
        description="Default minimum score for duplicate checks made over HTTP",
    )
    duplicate_scan_threshold: float = Field(
        default=0.7,
        ge=0.0,
        le=1.0,
        description="Minimum score used by the collection-wide duplicate scan",
    )
    duplicate_scan_limit: int = Field(
        default=50,
        ge=1,
        le=100,
        description="Maximum number of recipes loaded for a duplicate scan",
    )

    @property
    def cors_origins_list(self) -> list[str]:
        """Parse allowed CORS origins from comma-separated string.

        Returns:
            List of origins (empty if not configured)
        """
        if not self.cors_allowed_origins:
            return []
        return [o.strip() for o in self.cors_allowed_origins.split(",") if o.strip()]


# Global settings instance
settings = Settings()
