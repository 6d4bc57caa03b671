"""
Main Orchestrator for the Finance Planner Core

This module sits between the persistence layer and the pure calculations:
1. Schedule write path (payload -> config -> validate -> hand back to store)
2. Planner read path (load records -> occurrences + forecasts -> timeline)
3. Inventory read path (load items -> run-out metrics)

DESIGN DECISION: The orchestrator enforces the boundaries:
- No schedule reaches storage without passing validation
- Every read recomputes derived values from the current records
- Calculation errors propagate unchanged to the caller
"""

from typing import Any, Iterable, Optional, Union
from uuid import UUID

from src.config import get_settings
from src.inventory import compute_runout
from src.models.inventory import InventoryItem, InventoryRunout
from src.models.planner import PlannerCategory, UpcomingPlan
from src.models.schedule import ScheduleConfig
from src.observability import get_logger
from src.planner import build_plan, normalize_include, parse_include
from src.scheduling.calendar import DateLike
from src.scheduling.validator import ScheduleValidator
from src.services.storage import (
    InMemoryRecordSource,
    NotFoundError,
    PlannerRecordSource,
    StorageError,
)


logger = get_logger(__name__)


class ScheduleFlow:
    """
    Validates schedule payloads on the way into storage.

    Flow:
    1. Payload -> ScheduleConfig (camelCase or snake_case keys)
    2. Validate -> first issue raises ScheduleValidationError
    3. Return the config for the persistence layer to store
    """

    def __init__(self, validator: Optional[ScheduleValidator] = None):
        self._validator = validator or ScheduleValidator()

    def prepare(self, payload: dict[str, Any]) -> ScheduleConfig:
        """
        Build and validate a schedule config from a request payload.

        Raises:
            pydantic.ValidationError: wrong field types or unknown schedule type
            ScheduleValidationError: missing or out-of-range schedule field
        """
        config = ScheduleConfig.model_validate(payload)
        self._validator.validate(config)
        return config


class PlannerFlow:
    """
    Read-side flows over a user's records.

    Records are loaded fresh on every call; nothing is cached here.
    """

    def __init__(self, source: PlannerRecordSource):
        self._source = source
        self._settings = get_settings().planner

    async def _read(self, read, user_id: str) -> list:
        try:
            return await read(user_id)
        except StorageError as e:
            logger.error(
                "record_source_read_failed",
                user_id=user_id,
                source=type(self._source).__name__,
                error=str(e),
            )
            raise

    async def upcoming(
        self,
        user_id: str,
        days: Optional[int] = None,
        include: Union[str, Iterable[Union[str, PlannerCategory]], None] = None,
        now: Optional[DateLike] = None,
    ) -> UpcomingPlan:
        """
        Build the user's upcoming timeline.

        Args:
            user_id: Owner of the records
            days: Look-ahead window; defaults to the configured value
            include: Comma-separated selector, categories or category names;
                None means all
            now: Reference instant; defaults to now (UTC)

        Raises:
            InvalidArgumentError: bad ``days`` or unknown category
            StorageError: the record source failed to load
        """
        if isinstance(include, str):
            categories = parse_include(include)
        else:
            categories = normalize_include(include)

        if days is None:
            days = self._settings.default_lookahead_days

        incomes = []
        subscriptions = []
        items = []
        if PlannerCategory.INCOMES in categories:
            incomes = await self._read(self._source.list_income_streams, user_id)
        if PlannerCategory.SUBSCRIPTIONS in categories:
            subscriptions = await self._read(self._source.list_subscriptions, user_id)
        if PlannerCategory.INVENTORY in categories:
            items = await self._read(self._source.list_inventory_items, user_id)

        return build_plan(
            incomes=incomes,
            subscriptions=subscriptions,
            inventory_items=items,
            days=days,
            include=categories,
            now=now,
        )

    async def inventory_metrics(
        self,
        user_id: str,
        as_of: Optional[DateLike] = None,
    ) -> list[tuple[InventoryItem, InventoryRunout]]:
        """Run-out metrics for every item of the user, ordered by item name."""
        items = await self._read(self._source.list_inventory_items, user_id)
        items = sorted(items, key=lambda item: item.name)
        return [(item, compute_runout(item, as_of=as_of)) for item in items]

    async def inventory_item_metrics(
        self,
        user_id: str,
        item_id: UUID,
        as_of: Optional[DateLike] = None,
    ) -> tuple[InventoryItem, InventoryRunout]:
        """
        Run-out metrics for one item.

        Raises:
            NotFoundError: the user has no item with that id
        """
        for item in await self._read(self._source.list_inventory_items, user_id):
            if item.id == item_id:
                return item, compute_runout(item, as_of=as_of)

        logger.warning("inventory_item_not_found", user_id=user_id, item_id=str(item_id))
        raise NotFoundError(f"Inventory item {item_id} not found")


def create_app_components(
    source: Optional[PlannerRecordSource] = None,
) -> tuple[ScheduleFlow, PlannerFlow]:
    """
    Factory function to create the application flows.

    Args:
        source: Record source to read from. Defaults to an empty
                in-memory source for local runs and tests.

    Returns:
        (schedule_flow, planner_flow)
    """
    if source is None:
        logger.info("record_source_defaulted", source="in_memory")
        source = InMemoryRecordSource()

    return ScheduleFlow(), PlannerFlow(source)
