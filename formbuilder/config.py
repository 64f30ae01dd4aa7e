"""
Application Configuration

Uses pydantic-settings for environment variable loading with validation.
All configuration is centralized here for easy management.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict

from formbuilder.models.enums import GridSeedMode


class Settings(BaseSettings):
    """
    Form builder settings loaded from environment variables.

    Environment variables can be set directly or via .env file.
    """

    model_config = SettingsConfigDict(
        env_prefix="FORMBUILDER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ==========================================================================
    # Environment
    # ==========================================================================
    environment: Literal["development", "testing", "production"] = Field(
        default="development",
        description="Runtime environment"
    )

    debug: bool = Field(
        default=False,
        description="Enable debug mode"
    )

    log_level: str = Field(
        default="INFO",
        description="Root log level used by the CLI"
    )

    # ==========================================================================
    # Templates
    # ==========================================================================
    default_template_title: str = Field(
        default="Untitled Form",
        description="Title given to newly created templates"
    )

    template_version: int = Field(
        default=1,
        ge=1,
        description="Version stamped on newly created templates"
    )

    max_template_fields: int = Field(
        default=50,
        ge=1,
        description="Max fields the editor allows per template"
    )

    export_indent: int = Field(
        default=2,
        ge=0,
        description="Indentation used when exporting templates as JSON"
    )

    # ==========================================================================
    # Runtime form state
    # ==========================================================================
    grid_seed_mode: GridSeedMode = Field(
        default=GridSeedMode.EMPTY,
        description="Whether grids start empty or seeded from their defaultValue rows"
    )

    # ==========================================================================
    # Template acquisition
    # ==========================================================================
    fetch_timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        description="Timeout for fetching template documents over HTTP"
    )

    # ==========================================================================
    # Computed Properties
    # ==========================================================================
    @computed_field
    @property
    def is_testing(self) -> bool:
        """Check if running in testing mode."""
        return self.environment == "testing"


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()
