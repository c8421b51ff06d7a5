"""Configuration Management."""

from functools import lru_cache
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


class Settings(BaseSettings):
    """Application settings from environment."""

    model_config = SettingsConfigDict(
        env_prefix="PAGEWRIGHT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Logging
    log_level: str = Field(default="INFO", description="Log level")
    json_logs: bool = Field(default=False, description="Use JSON log format")

    # Export
    concurrency: int = Field(default=5, gt=0, description="Pages compiled per batch")
    output_dir_name: str = Field(default="miniprogram", description="Output directory name")
    optimize: bool = Field(default=False, description="Run optimizer passes")
    auto_package: bool = Field(default=False, description="Zip the output after export")

    # Caching
    enable_cache: bool = Field(default=True, description="Enable style caching")
    cache_size: int = Field(default=1000, gt=0, description="Cache max entries")
    cache_ttl: int = Field(default=3600, gt=0, description="Cache TTL (seconds)")

    # Compilation
    px_to_rpx_ratio: float = Field(default=2.0, gt=0.0, description="rpx per px")
    add_comments: bool = Field(default=True, description="Emit markup header comments")
    max_children: int = Field(default=10, gt=0, description="Child count warning threshold")
    max_selector_depth: int = Field(default=4, gt=0, description="Selector depth warning threshold")

    # Input limits
    max_project_size: int = Field(
        default=8 * 1024 * 1024, gt=0, description="Max project document size (bytes)"
    )
    max_json_depth: int = Field(default=64, gt=0, description="Max project document nesting")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
