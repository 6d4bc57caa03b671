"""Services package."""

from src.services.storage import (
    InMemoryRecordSource,
    NotFoundError,
    PlannerRecordSource,
    StorageError,
)

__all__ = [
    "InMemoryRecordSource",
    "NotFoundError",
    "PlannerRecordSource",
    "StorageError",
]
