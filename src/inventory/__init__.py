"""Inventory depletion forecasting package."""

from src.inventory.runout import compute_runout

__all__ = ["compute_runout"]
