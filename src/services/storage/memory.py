"""
In-Memory Record Source

Dict-backed PlannerRecordSource keyed by user id. Used by tests and for
local wiring when no database is configured.
"""

from collections import defaultdict

from src.models.inventory import InventoryItem
from src.models.planner import IncomeStream, Subscription
from src.services.storage.interface import PlannerRecordSource


class InMemoryRecordSource(PlannerRecordSource):
    """Stores records per user in plain lists."""

    def __init__(self):
        self._incomes: dict[str, list[IncomeStream]] = defaultdict(list)
        self._subscriptions: dict[str, list[Subscription]] = defaultdict(list)
        self._items: dict[str, list[InventoryItem]] = defaultdict(list)

    def add_income_stream(self, user_id: str, income: IncomeStream) -> None:
        self._incomes[user_id].append(income)

    def add_subscription(self, user_id: str, subscription: Subscription) -> None:
        self._subscriptions[user_id].append(subscription)

    def add_inventory_item(self, user_id: str, item: InventoryItem) -> None:
        self._items[user_id].append(item)

    async def list_income_streams(self, user_id: str) -> list[IncomeStream]:
        return list(self._incomes.get(user_id, []))

    async def list_subscriptions(self, user_id: str) -> list[Subscription]:
        return list(self._subscriptions.get(user_id, []))

    async def list_inventory_items(self, user_id: str) -> list[InventoryItem]:
        return list(self._items.get(user_id, []))
