"""
Configuration Management for AssetPlace

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
System-wide settings stored by the admin (year counts, inflation tiers) are
data, not configuration; the values below are the fallbacks used when that
data is missing.
"""

from functools import lru_cache
from typing import Union

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ProjectionSettings(BaseSettings):
    """Fallback assumptions for the projection engine."""

    model_config = SettingsConfigDict(
        env_prefix="ASSETPLACE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    fallback_inflation_rate: float = Field(
        default=2.5,
        ge=0.0,
        le=100.0,
        description="Inflation rate (%) used when system settings have none"
    )
    fallback_basic_mode_years: int = Field(
        default=10,
        ge=1,
        description="Projection horizon for basic mode users"
    )
    fallback_advanced_mode_years: int = Field(
        default=30,
        ge=1,
        description="Projection horizon for advanced mode users"
    )
    max_projection_years: int = Field(
        default=50,
        ge=1,
        le=200,
        description="Longest horizon a request may ask for"
    )


class StorageSettings(BaseSettings):
    """Retry policy for fetching portfolio data."""

    model_config = SettingsConfigDict(
        env_prefix="ASSETPLACE_STORAGE_",
        extra="ignore"
    )

    retry_attempts: int = Field(
        default=3,
        ge=1,
        le=10,
        description="Attempts before a storage fetch is given up"
    )
    retry_wait_seconds: float = Field(
        default=0.5,
        ge=0.0,
        description="Initial backoff between attempts"
    )
    retry_max_wait_seconds: float = Field(
        default=4.0,
        ge=0.0,
        description="Backoff ceiling"
    )


class AppSettings(BaseSettings):
    """
    Main application settings.

    Loads configuration from environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Environment
    app_environment: str = Field(
        default="development",
        description="Application environment"
    )
    debug_mode: bool = Field(
        default=False,
        description="Enable debug mode"
    )
    log_level: str = Field(
        default="INFO",
        description="Minimum level for structured logs"
    )

    @field_validator('log_level')
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level


class Settings(BaseSettings):
    """
    Root settings container.

    Aggregates all sub-settings for easy access.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    @property
    def projection(self) -> ProjectionSettings:
        return ProjectionSettings()

    @property
    def storage(self) -> StorageSettings:
        return StorageSettings()

    @property
    def app(self) -> AppSettings:
        return AppSettings()


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings (cached).

    Call get_settings.cache_clear() to reload if needed.
    """
    return Settings()


def validate_all_settings() -> dict[str, Union[bool, str]]:
    """
    Validate all settings are properly configured.

    Returns a dict of {setting_name: is_valid}, plus a "<name>_error" entry
    for each section that failed to load. Useful for startup checks.
    """
    results: dict[str, Union[bool, str]] = {}

    settings = get_settings()

    for name in ("projection", "storage", "app"):
        try:
            getattr(settings, name)
            results[name] = True
        except ValueError as e:
            results[name] = False
            results[f"{name}_error"] = str(e)

    return results
