"""
Inventory Models

Consumables tracked against a constant daily consumption rate.
Stock is restocked by purchases and depleted linearly between them.

Quantities are Decimals so the projected stock is exact before rounding.
"""

from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field

from src.config import get_settings


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _default_reminder_days() -> int:
    return get_settings().inventory.default_reminder_advance_days


class InventoryPurchase(BaseModel):
    """A single restock event."""
    model_config = ConfigDict(frozen=True)

    id: UUID = Field(default_factory=uuid4)
    quantity: Decimal = Field(
        ...,
        gt=0,
        description="Units added to stock"
    )
    purchased_at: datetime = Field(
        ...,
        description="When the restock happened"
    )
    notes: Optional[str] = None


class InventoryItem(BaseModel):
    """
    A consumable the user keeps in stock.

    ``initial_stock_date`` falls back to ``created_at`` when absent.
    A missing consumption rate or initial quantity counts as zero.
    """
    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    id: UUID = Field(default_factory=uuid4)
    name: str = Field(
        ...,
        min_length=1,
        max_length=200
    )
    created_at: datetime = Field(default_factory=_utcnow)

    consumption_per_day: Optional[Decimal] = Field(
        default=None,
        ge=0,
        description="Units consumed per day"
    )
    initial_stock_quantity: Optional[Decimal] = Field(
        default=None,
        description="Units on hand at initial_stock_date"
    )
    initial_stock_date: Optional[datetime] = None
    reminder_advance_days: int = Field(
        default_factory=_default_reminder_days,
        ge=0,
        description="Days before run-out to remind"
    )

    # Carried through to planner events, not used in calculations
    unit_name: Optional[str] = Field(default=None, max_length=50)
    category_name: Optional[str] = None
    subcategory_name: Optional[str] = None
    purchase_quantity: Optional[Decimal] = Field(default=None, ge=0)
    cost_per_purchase: Optional[Decimal] = Field(default=None, ge=0)
    notes: Optional[str] = Field(default=None, max_length=1000)

    purchases: list[InventoryPurchase] = Field(default_factory=list)

    @property
    def stock_start(self) -> datetime:
        return self.initial_stock_date or self.created_at


class InventoryRunout(BaseModel):
    """Derived depletion forecast. Recomputed on every read, never stored."""
    model_config = ConfigDict(frozen=True)

    stock_on_hand: Decimal = Field(
        ...,
        ge=0,
        description="Units left as of the evaluation day"
    )
    run_out_date: Optional[date] = Field(
        default=None,
        description="Day stock reaches zero; None when nothing is consumed"
    )
    reminder_date: Optional[date] = Field(
        default=None,
        description="run_out_date minus the item's reminder lead time"
    )
