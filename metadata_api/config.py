from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables or .env file."""

    app_name: str = Field(
        default="Link Metadata API",
        description="Application name",
    )
    host: str = Field(default="0.0.0.0", description="Interface to bind")
    port: int = Field(default=8091, description="Port to bind")

    user_agent: str = Field(
        default="Mozilla/5.0 (compatible; MetadataBot/1.0)",
        description="User-Agent sent when fetching target pages",
    )
    fetch_timeout: float = Field(
        default=10.0,
        gt=0,
        description="Total time budget in seconds for fetching a target page",
    )
    metadata_shape: Literal["multi", "single"] = Field(
        default="multi",
        description="Response shape: lists of favicons/preview images, or one of each",
    )

    cors_allow_origins: list[str] = Field(default=["*"])
    cors_allow_methods: list[str] = Field(default=["*"])
    cors_allow_headers: list[str] = Field(default=["*"])

    log_level: str = Field(default="INFO")
    log_format: Literal["text", "json"] = Field(default="text")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,  # Allow both METADATA_SHAPE and metadata_shape
        extra="ignore",  # Ignore extra environment variables
    )


@lru_cache()
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
