"""
Abstract Record Source Interface

DESIGN DECISION: The planner core never talks to a database.
The persistence layer implements this interface and hands already-validated
records to the flows in ``src.orchestrator``. This allows us to:
1. Swap the backing store without touching the calculations
2. Use in-memory storage for testing
3. Keep ownership checks (records belong to a user) in one place

The interface is read-only: writes stay in the persistence layer.
"""

from abc import ABC, abstractmethod

from src.models.inventory import InventoryItem
from src.models.planner import IncomeStream, Subscription


class PlannerRecordSource(ABC):
    """
    Abstract interface for loading a user's schedule-bearing records.

    Any storage implementation (PostgreSQL, in-memory, etc.)
    must implement these methods.
    """

    @abstractmethod
    async def list_income_streams(self, user_id: str) -> list[IncomeStream]:
        """
        List the user's income streams.

        Raises:
            StorageError: If the read fails
        """
        pass

    @abstractmethod
    async def list_subscriptions(self, user_id: str) -> list[Subscription]:
        """
        List the user's subscriptions.

        Raises:
            StorageError: If the read fails
        """
        pass

    @abstractmethod
    async def list_inventory_items(self, user_id: str) -> list[InventoryItem]:
        """
        List the user's inventory items, each with its purchases loaded.

        Raises:
            StorageError: If the read fails
        """
        pass


# =============================================================================
# EXCEPTIONS
# =============================================================================

class StorageError(Exception):
    """Base exception for storage errors."""
    pass


class NotFoundError(StorageError):
    """Record not found."""
    pass
