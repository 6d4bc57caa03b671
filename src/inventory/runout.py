"""
Inventory Depletion Simulator

Walks an item's purchase history in date order, debiting a constant daily
consumption between restocks, and projects the day stock reaches zero.

MODEL:
- Purchases are instantaneous restocks
- Consumption is linear and only ever applied forward in time
- A purchase dated before the running cursor rewinds the cursor without
  any debit (out-of-order data entry)
- Once stock runs dry between two purchases, the walk stops there

Nothing is cached: every call recomputes from the item and its purchases.
"""

import math
from datetime import date, datetime, timezone
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Optional

from src.config import get_settings
from src.models.inventory import InventoryItem, InventoryPurchase, InventoryRunout
from src.observability import get_logger
from src.scheduling.calendar import DateLike, add_days, difference_in_days, to_day


logger = get_logger(__name__)

ZERO = Decimal("0")


def _days_until_empty(stock: Decimal, consumption_per_day: Decimal) -> int:
    return max(0, math.ceil(stock / consumption_per_day))


def _round_stock(stock: Decimal, places: int) -> Decimal:
    quantum = Decimal(1).scaleb(-places)
    return max(ZERO, stock.quantize(quantum, rounding=ROUND_HALF_UP))


def compute_runout(
    item: InventoryItem,
    purchases: Optional[Iterable[InventoryPurchase]] = None,
    as_of: Optional[DateLike] = None,
) -> InventoryRunout:
    """
    Forecast stock on hand, run-out date and reminder date for ``item``.

    Args:
        item: The inventory item
        purchases: Restocks in any order; defaults to ``item.purchases``
        as_of: Evaluation instant; defaults to now (UTC)

    Returns:
        InventoryRunout. Both dates are None when nothing is consumed.
    """
    places = get_settings().inventory.stock_decimal_places
    consumption = item.consumption_per_day or ZERO
    stock = max(ZERO, item.initial_stock_quantity or ZERO)

    if consumption <= 0:
        return InventoryRunout(
            stock_on_hand=_round_stock(stock, places),
            run_out_date=None,
            reminder_date=None,
        )

    today = to_day(as_of if as_of is not None else datetime.now(timezone.utc))
    cursor = to_day(item.stock_start)
    run_out_date: Optional[date] = None

    if purchases is None:
        purchases = item.purchases
    ordered = sorted(purchases, key=lambda purchase: to_day(purchase.purchased_at))

    for purchase in ordered:
        purchase_day = to_day(purchase.purchased_at)

        if purchase_day > cursor:
            consumed = consumption * difference_in_days(purchase_day, cursor)
            if stock - consumed <= 0:
                run_out_date = add_days(cursor, _days_until_empty(stock, consumption))
                break
            stock -= consumed

        cursor = purchase_day
        stock += purchase.quantity

    if run_out_date is None:
        if today > cursor:
            stock -= consumption * difference_in_days(today, cursor)
            cursor = today

        if stock <= 0:
            run_out_date = today
        else:
            run_out_date = add_days(cursor, _days_until_empty(stock, consumption))

    reminder_date = add_days(run_out_date, -item.reminder_advance_days)

    logger.debug(
        "inventory_runout_computed",
        item_id=str(item.id),
        as_of=today.isoformat(),
        run_out_date=run_out_date.isoformat(),
    )

    return InventoryRunout(
        stock_on_hand=_round_stock(stock, places),
        run_out_date=run_out_date,
        reminder_date=reminder_date,
    )
