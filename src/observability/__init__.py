"""Structured logging package."""

from src.observability.logger import (
    add_environment,
    configure_logging,
    get_logger,
    resolve_level,
)

__all__ = ["add_environment", "configure_logging", "get_logger", "resolve_level"]
