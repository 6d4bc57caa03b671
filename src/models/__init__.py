"""
Data Models Package

This package contains all Pydantic models used by the planner core.
Every value passed into or returned from the core conforms to these schemas.
"""

from src.models.inventory import (
    InventoryItem,
    InventoryPurchase,
    InventoryRunout,
)
from src.models.planner import (
    IncomeStream,
    PlannerCategory,
    PlannerEvent,
    PlannerEventType,
    Subscription,
    UpcomingPlan,
)
from src.models.schedule import (
    ScheduleConfig,
    ScheduleOccurrence,
    ScheduleType,
    ValidationIssue,
    ValidationResult,
    assert_exhaustive,
)

__all__ = [
    # Schedule models
    "ScheduleConfig",
    "ScheduleOccurrence",
    "ScheduleType",
    "ValidationIssue",
    "ValidationResult",
    "assert_exhaustive",
    # Inventory models
    "InventoryItem",
    "InventoryPurchase",
    "InventoryRunout",
    # Planner models
    "IncomeStream",
    "PlannerCategory",
    "PlannerEvent",
    "PlannerEventType",
    "Subscription",
    "UpcomingPlan",
]
