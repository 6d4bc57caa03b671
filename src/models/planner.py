"""
Planner Models

Schedule-bearing records (income streams, subscriptions) and the derived
timeline events the planner produces from them and from inventory forecasts.
"""

import datetime as dt
from decimal import Decimal
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field

from src.models.schedule import ScheduleConfig


class PlannerEventType(str, Enum):
    """Kinds of events on the upcoming timeline."""
    INCOME = "INCOME"
    SUBSCRIPTION = "SUBSCRIPTION"
    INVENTORY_REMINDER = "INVENTORY_REMINDER"
    INVENTORY_RUNOUT = "INVENTORY_RUNOUT"


class PlannerCategory(str, Enum):
    """Record groups a caller can select for the timeline."""
    INCOMES = "incomes"
    SUBSCRIPTIONS = "subscriptions"
    INVENTORY = "inventory"


class IncomeStream(BaseModel):
    """A recurring income (salary, rent received, ...)."""
    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    id: UUID = Field(default_factory=uuid4)
    name: str = Field(..., min_length=1, max_length=200)
    amount: Decimal = Field(..., ge=0)
    currency: str = Field(default="USD", min_length=3, max_length=3)
    notes: Optional[str] = Field(default=None, max_length=1000)
    schedule: ScheduleConfig


class Subscription(BaseModel):
    """A recurring charge (streaming service, gym, insurance premium, ...)."""
    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    id: UUID = Field(default_factory=uuid4)
    name: str = Field(..., min_length=1, max_length=200)
    amount: Decimal = Field(..., ge=0)
    currency: str = Field(default="USD", min_length=3, max_length=3)
    notes: Optional[str] = Field(default=None, max_length=1000)
    category_name: Optional[str] = None
    schedule: ScheduleConfig


class PlannerEvent(BaseModel):
    """One entry on the upcoming timeline. Lives only for one response."""

    id: str = Field(
        ...,
        description="Stable key: <kind>-<record id>-<iso date>"
    )
    type: PlannerEventType
    name: str
    date: dt.date
    window_end: Optional[dt.date] = Field(
        default=None,
        description="End of a range occurrence"
    )
    metadata: dict[str, Any] = Field(default_factory=dict)


class UpcomingPlan(BaseModel):
    """Merged, date-ordered timeline for one look-ahead window."""

    window_start: dt.date
    window_end: dt.date
    events: list[PlannerEvent] = Field(default_factory=list)

    def events_of(self, event_type: PlannerEventType) -> list[PlannerEvent]:
        return [event for event in self.events if event.type == event_type]
