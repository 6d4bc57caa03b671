"""
Schedule Models

A recurring financial event (an income stream or a subscription) is described
by a ScheduleConfig: one of four closed variants selected by ``schedule_type``.

DESIGN DECISION: Field bounds are NOT enforced at model construction.
The schedule validator owns those rules so that every violation surfaces as a
field-specific ScheduleValidationError instead of a generic pydantic error.

Payloads may use camelCase (``dayOfMonth``) or snake_case (``day_of_month``).
"""

import datetime as dt
from enum import Enum
from typing import Never, NoReturn, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from src.errors import UnsupportedScheduleTypeError


class ScheduleType(str, Enum):
    """
    Supported recurrence variants.

    CRITICAL: This set is closed. Every consumer dispatches over it with an
    exhaustive if/elif chain ending in ``assert_exhaustive``.
    """
    FIXED_DATE = "FIXED_DATE"                  # same day every month
    BUSINESS_DAY = "BUSINESS_DAY"              # n-th Mon-Fri of the month
    DATE_RANGE = "DATE_RANGE"                  # day span within the month
    BUSINESS_DAY_RANGE = "BUSINESS_DAY_RANGE"  # business-day span


def assert_exhaustive(value: Never) -> NoReturn:
    """
    Terminal branch of a dispatch over ScheduleType.

    A type checker rejects the call if any variant was left unhandled.
    At runtime it is only reachable with a malformed config.
    """
    raise UnsupportedScheduleTypeError(f"Unsupported schedule type {value!r}")


class ScheduleConfig(BaseModel):
    """One recurrence definition."""
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    schedule_type: ScheduleType = Field(
        ...,
        description="Recurrence variant"
    )
    day_of_month: Optional[int] = Field(
        default=None,
        description="Day 1-31 (FIXED_DATE)"
    )
    nth_business_day: Optional[int] = Field(
        default=None,
        description="Positive business-day ordinal (BUSINESS_DAY)"
    )
    month_day_range_start: Optional[int] = Field(
        default=None,
        description="First day 1-31 of the span (DATE_RANGE)"
    )
    month_day_range_end: Optional[int] = Field(
        default=None,
        description="Last day 1-31 of the span (DATE_RANGE)"
    )
    business_day_range_start: Optional[int] = Field(
        default=None,
        description="First business-day ordinal (BUSINESS_DAY_RANGE)"
    )
    business_day_range_end: Optional[int] = Field(
        default=None,
        description="Last business-day ordinal (BUSINESS_DAY_RANGE)"
    )
    active_months: tuple[int, ...] = Field(
        default=(),
        description="Months 1-12 the schedule fires in; empty means every month"
    )

    def is_month_active(self, month: int) -> bool:
        """Check a 1-based month against ``active_months``."""
        return not self.active_months or month in self.active_months


class ScheduleOccurrence(BaseModel):
    """A concrete calendar instance of a schedule for one month."""
    model_config = ConfigDict(frozen=True)

    date: dt.date
    end_date: Optional[dt.date] = Field(
        default=None,
        description="Last day of the span, range schedules only"
    )

    @property
    def is_range(self) -> bool:
        return self.end_date is not None


# =============================================================================
# VALIDATION MODELS
# =============================================================================

class ValidationIssue(BaseModel):
    """A single problem found in a schedule config."""

    field: str = Field(
        ...,
        description="Field with the issue"
    )
    issue_type: str = Field(
        ...,
        pattern="^(missing|out_of_range|inverted_range)$",
        description="Kind of issue"
    )
    message: str = Field(
        ...,
        description="Human-readable description of the issue"
    )
    suggested_fix: Optional[str] = None


class ValidationResult(BaseModel):
    """
    Result of the two-stage schedule validation.

    Stage 1: Required fields for the variant (and span ordering)
    Stage 2: Bounds of every present field
    """

    schedule_type: ScheduleType
    validated_at: dt.datetime = Field(
        default_factory=lambda: dt.datetime.now(dt.timezone.utc)
    )
    required_fields_valid: bool
    bounds_valid: bool
    issues: list[ValidationIssue] = Field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return self.required_fields_valid and self.bounds_valid

    @property
    def first_issue(self) -> Optional[ValidationIssue]:
        return self.issues[0] if self.issues else None
