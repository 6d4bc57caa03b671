"""Configuration package."""

from src.config.settings import (
    AppSettings,
    InventorySettings,
    PlannerSettings,
    Settings,
    get_settings,
)

__all__ = [
    "AppSettings",
    "InventorySettings",
    "PlannerSettings",
    "Settings",
    "get_settings",
]
