"""
Storage Services Package

Provides the abstract record source the planner flows read from and an
in-memory implementation. Concrete database backends live outside the core.
"""

from src.services.storage.interface import (
    NotFoundError,
    PlannerRecordSource,
    StorageError,
)
from src.services.storage.memory import InMemoryRecordSource

__all__ = [
    # Interfaces
    "PlannerRecordSource",
    # Exceptions
    "NotFoundError",
    "StorageError",
    # In-memory implementation
    "InMemoryRecordSource",
]
