"""
Upcoming-Events Planner

Merges schedule occurrences of income streams and subscriptions with
inventory reminder and run-out dates into one date-ordered timeline.

The window is ``[today, today + days]`` inclusive on both ends.
Ties on the same date keep insertion order: incomes, then subscriptions,
then inventory.
"""

from datetime import date, datetime, timezone
from typing import Iterable, Optional, Union

from src.config import get_settings
from src.errors import InvalidArgumentError
from src.inventory import compute_runout
from src.models.inventory import InventoryItem
from src.models.planner import (
    IncomeStream,
    PlannerCategory,
    PlannerEvent,
    PlannerEventType,
    Subscription,
    UpcomingPlan,
)
from src.observability import get_logger
from src.scheduling.calendar import DateLike, add_days, to_day
from src.scheduling.occurrences import generate_occurrences


logger = get_logger(__name__)


def _to_category(entry: Union[str, PlannerCategory]) -> PlannerCategory:
    try:
        return PlannerCategory(entry.strip().lower())
    except (AttributeError, ValueError):
        allowed = ", ".join(category.value for category in PlannerCategory)
        raise InvalidArgumentError(
            f"Unknown planner category {entry!r}. Allowed: {allowed}",
            field="include",
        )


def normalize_include(
    include: Optional[Iterable[Union[str, PlannerCategory]]],
) -> set[PlannerCategory]:
    """
    Coerce category names or members into a set of PlannerCategory.

    None or an empty collection selects every category.

    Raises:
        InvalidArgumentError: for an unknown category name
    """
    categories = {_to_category(entry) for entry in include or ()}
    return categories or set(PlannerCategory)


def parse_include(raw: Optional[str]) -> set[PlannerCategory]:
    """
    Parse a selector such as ``"incomes, Inventory"``.

    Blank input selects every category.

    Raises:
        InvalidArgumentError: for an unknown category name
    """
    if raw is None:
        return set(PlannerCategory)
    return normalize_include(entry for entry in raw.split(",") if entry.strip())


def _schedule_events(
    event_type: PlannerEventType,
    record: Union[IncomeStream, Subscription],
    window_start: date,
    window_end: date,
    metadata: dict,
) -> list[PlannerEvent]:
    events = []
    prefix = event_type.value.lower()
    for occurrence in generate_occurrences(record.schedule, window_start, window_end):
        events.append(PlannerEvent(
            id=f"{prefix}-{record.id}-{occurrence.date.isoformat()}",
            type=event_type,
            name=record.name,
            date=occurrence.date,
            window_end=occurrence.end_date,
            metadata=dict(metadata),
        ))
    return events


def _inventory_events(
    item: InventoryItem,
    window_start: date,
    window_end: date,
) -> list[PlannerEvent]:
    metrics = compute_runout(item, as_of=window_start)
    shared = {
        "stock_on_hand": metrics.stock_on_hand,
        "reminder_days": item.reminder_advance_days,
        "category": item.category_name,
        "subcategory": item.subcategory_name,
        "purchase_quantity": item.purchase_quantity,
        "cost_per_purchase": item.cost_per_purchase,
        "unit": item.unit_name,
        "notes": item.notes,
    }

    events = []
    reminder = metrics.reminder_date
    if reminder is not None and window_start <= reminder <= window_end:
        events.append(PlannerEvent(
            id=f"inventory-reminder-{item.id}-{reminder.isoformat()}",
            type=PlannerEventType.INVENTORY_REMINDER,
            name=item.name,
            date=reminder,
            metadata={**shared, "run_out_date": metrics.run_out_date},
        ))

    run_out = metrics.run_out_date
    if run_out is not None and window_start <= run_out <= window_end:
        events.append(PlannerEvent(
            id=f"inventory-runout-{item.id}-{run_out.isoformat()}",
            type=PlannerEventType.INVENTORY_RUNOUT,
            name=item.name,
            date=run_out,
            metadata=shared,
        ))
    return events


def build_plan(
    incomes: Iterable[IncomeStream],
    subscriptions: Iterable[Subscription],
    inventory_items: Iterable[InventoryItem],
    days: int,
    include: Optional[Iterable[Union[str, PlannerCategory]]] = None,
    now: Optional[DateLike] = None,
) -> UpcomingPlan:
    """
    Build the upcoming timeline for the next ``days`` days.

    Args:
        incomes: Income streams to expand
        subscriptions: Subscriptions to expand
        inventory_items: Items (with purchases) to forecast
        days: Look-ahead window length, must be positive
        include: Categories or category names; None or empty means all
        now: Reference instant; defaults to now (UTC)

    Raises:
        InvalidArgumentError: ``days`` is not positive or exceeds the limit,
            or ``include`` names an unknown category
    """
    max_days = get_settings().planner.max_lookahead_days
    if days <= 0:
        raise InvalidArgumentError("days must be a positive number", field="days")
    if days > max_days:
        raise InvalidArgumentError(
            f"days must not exceed {max_days}", field="days"
        )

    categories = normalize_include(include)
    window_start = to_day(now if now is not None else datetime.now(timezone.utc))
    window_end = add_days(window_start, days)

    events: list[PlannerEvent] = []

    if PlannerCategory.INCOMES in categories:
        for income in incomes:
            events.extend(_schedule_events(
                PlannerEventType.INCOME,
                income,
                window_start,
                window_end,
                {
                    "amount": income.amount,
                    "currency": income.currency,
                    "notes": income.notes,
                },
            ))

    if PlannerCategory.SUBSCRIPTIONS in categories:
        for subscription in subscriptions:
            events.extend(_schedule_events(
                PlannerEventType.SUBSCRIPTION,
                subscription,
                window_start,
                window_end,
                {
                    "amount": subscription.amount,
                    "currency": subscription.currency,
                    "notes": subscription.notes,
                    "category": subscription.category_name,
                },
            ))

    if PlannerCategory.INVENTORY in categories:
        for item in inventory_items:
            events.extend(_inventory_events(item, window_start, window_end))

    events.sort(key=lambda event: event.date)

    logger.info(
        "planner_built",
        window_start=window_start.isoformat(),
        window_end=window_end.isoformat(),
        categories=sorted(category.value for category in categories),
        event_count=len(events),
    )

    return UpcomingPlan(
        window_start=window_start,
        window_end=window_end,
        events=events,
    )
