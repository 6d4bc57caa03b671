"""
Configuration Management for the Finance Planner Core

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
The calculation core itself takes every input explicitly; settings only
supply defaults (look-ahead window, reminder lead time) to the callers.
"""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class PlannerSettings(BaseSettings):
    """Upcoming-events planner configuration."""

    model_config = SettingsConfigDict(
        env_prefix="PLANNER_",
        extra="ignore"
    )

    default_lookahead_days: int = Field(
        default=60,
        ge=1,
        le=3650,
        description="Look-ahead window used when the caller gives no day count"
    )
    max_lookahead_days: int = Field(
        default=3650,
        ge=1,
        description="Largest look-ahead window a caller may request"
    )


class InventorySettings(BaseSettings):
    """Inventory depletion forecasting configuration."""

    model_config = SettingsConfigDict(
        env_prefix="INVENTORY_",
        extra="ignore"
    )

    default_reminder_advance_days: int = Field(
        default=7,
        ge=0,
        description="Days before run-out to remind when an item sets none"
    )
    stock_decimal_places: int = Field(
        default=4,
        ge=0,
        le=10,
        description="Precision of the reported stock on hand"
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
    def validate_log_level(cls, v: str) -> str:
        """Only accept standard logging level names."""
        allowed = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in allowed:
            raise ValueError(f"Unsupported log level: {v}. Allowed: {allowed}")
        return v.upper()


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
    def planner(self) -> PlannerSettings:
        return PlannerSettings()

    @property
    def inventory(self) -> InventorySettings:
        return InventorySettings()

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
