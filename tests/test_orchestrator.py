"""
Tests for the orchestrator flows.

Records come from the in-memory source; no external services are involved.
"""

import asyncio

import pytest
from datetime import date, datetime
from decimal import Decimal
from uuid import uuid4

from pydantic import ValidationError

from src.errors import ScheduleValidationError
from src.models.inventory import InventoryItem
from src.models.planner import IncomeStream, PlannerEventType, Subscription
from src.models.schedule import ScheduleConfig, ScheduleType
from src.orchestrator import PlannerFlow, ScheduleFlow, create_app_components
from src.services.storage import InMemoryRecordSource, NotFoundError, StorageError


USER = "user-1"


class UnavailableRecordSource(InMemoryRecordSource):
    """Record source whose inventory reads always fail."""

    async def list_inventory_items(self, user_id: str) -> list[InventoryItem]:
        raise StorageError("inventory table unavailable")


@pytest.fixture
def source():
    source = InMemoryRecordSource()
    source.add_income_stream(USER, IncomeStream(
        name="Salary",
        amount=Decimal("5000"),
        schedule=ScheduleConfig(schedule_type=ScheduleType.BUSINESS_DAY, nth_business_day=1),
    ))
    source.add_subscription(USER, Subscription(
        name="Phone",
        amount=Decimal("25"),
        schedule=ScheduleConfig(schedule_type=ScheduleType.FIXED_DATE, day_of_month=20),
    ))
    source.add_inventory_item(USER, InventoryItem(
        name="Rice",
        consumption_per_day=Decimal("0.5"),
        initial_stock_quantity=Decimal("5"),
        initial_stock_date=datetime(2024, 1, 1),
        reminder_advance_days=2,
    ))
    source.add_inventory_item(USER, InventoryItem(
        name="Dish soap",
        consumption_per_day=Decimal("0"),
        initial_stock_quantity=Decimal("2"),
    ))
    source.add_subscription("someone-else", Subscription(
        name="Other",
        amount=Decimal("1"),
        schedule=ScheduleConfig(schedule_type=ScheduleType.FIXED_DATE, day_of_month=2),
    ))
    return source


class TestScheduleFlow:
    """Tests for the schedule write path."""

    def test_prepare_accepts_camel_case(self):
        config = ScheduleFlow().prepare({
            "scheduleType": "DATE_RANGE",
            "monthDayRangeStart": 1,
            "monthDayRangeEnd": 7,
            "activeMonths": [6, 7],
        })
        assert config.schedule_type == ScheduleType.DATE_RANGE
        assert config.month_day_range_end == 7
        assert config.active_months == (6, 7)

    def test_prepare_accepts_snake_case(self):
        config = ScheduleFlow().prepare({"schedule_type": "FIXED_DATE", "day_of_month": 3})
        assert config.day_of_month == 3

    def test_prepare_rejects_invalid_config(self):
        with pytest.raises(ScheduleValidationError, match="month_day_range_start"):
            ScheduleFlow().prepare({
                "scheduleType": "DATE_RANGE",
                "monthDayRangeStart": 20,
                "monthDayRangeEnd": 5,
            })

    def test_prepare_rejects_unknown_type(self):
        with pytest.raises(ValidationError):
            ScheduleFlow().prepare({"scheduleType": "WEEKLY"})


class TestPlannerFlow:
    """Tests for the read paths."""

    def test_upcoming_all_categories(self, source):
        flow = PlannerFlow(source)
        plan = asyncio.run(flow.upcoming(USER, days=31, now=date(2024, 1, 1)))
        assert [(e.type, e.name, e.date) for e in plan.events] == [
            (PlannerEventType.INCOME, "Salary", date(2024, 1, 1)),
            (PlannerEventType.INVENTORY_REMINDER, "Rice", date(2024, 1, 9)),
            (PlannerEventType.INVENTORY_RUNOUT, "Rice", date(2024, 1, 11)),
            (PlannerEventType.SUBSCRIPTION, "Phone", date(2024, 1, 20)),
            (PlannerEventType.INCOME, "Salary", date(2024, 2, 1)),
        ]

    def test_upcoming_with_selector_string(self, source):
        flow = PlannerFlow(source)
        plan = asyncio.run(flow.upcoming(
            USER, days=31, include="subscriptions", now=date(2024, 1, 1)
        ))
        assert [e.name for e in plan.events] == ["Phone"]

    def test_upcoming_default_window(self, source):
        plan = asyncio.run(PlannerFlow(source).upcoming(USER, now=date(2024, 1, 1)))
        assert (plan.window_end - plan.window_start).days == 60

    def test_inventory_metrics_sorted_by_name(self, source):
        flow = PlannerFlow(source)
        metrics = asyncio.run(flow.inventory_metrics(USER, as_of=date(2024, 1, 5)))
        assert [item.name for item, _ in metrics] == ["Dish soap", "Rice"]
        soap, rice = metrics[0][1], metrics[1][1]
        assert soap.run_out_date is None
        assert rice.stock_on_hand == Decimal("3")
        assert rice.run_out_date == date(2024, 1, 11)

    def test_inventory_item_metrics_not_found(self, source):
        with pytest.raises(NotFoundError):
            asyncio.run(PlannerFlow(source).inventory_item_metrics(USER, uuid4()))

    def test_inventory_item_metrics(self, source):
        items = asyncio.run(source.list_inventory_items(USER))
        item, runout = asyncio.run(PlannerFlow(source).inventory_item_metrics(
            USER, items[0].id, as_of=date(2024, 1, 1)
        ))
        assert item.name == "Rice"
        assert runout.reminder_date == date(2024, 1, 9)

    def test_storage_error_propagates(self):
        flow = PlannerFlow(UnavailableRecordSource())
        with pytest.raises(StorageError, match="inventory table unavailable"):
            asyncio.run(flow.upcoming(USER, days=30, now=date(2024, 1, 1)))

    def test_storage_error_skipped_when_category_not_selected(self):
        flow = PlannerFlow(UnavailableRecordSource())
        plan = asyncio.run(flow.upcoming(
            USER, days=30, include={"incomes"}, now=date(2024, 1, 1)
        ))
        assert plan.events == []

    def test_create_app_components_defaults_to_memory(self):
        schedule_flow, planner_flow = create_app_components()
        assert isinstance(schedule_flow, ScheduleFlow)
        assert isinstance(planner_flow, PlannerFlow)
