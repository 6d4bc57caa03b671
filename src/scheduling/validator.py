"""
Two-Stage Schedule Validation

STAGE 1 - REQUIRED FIELDS:
- Each schedule type needs its own fields
- Range types also need start <= end

STAGE 2 - BOUNDS:
- Every present field is checked, whatever the schedule type
- dayOfMonth and month-day bounds in 1-31, business-day ordinals > 0
- activeMonths entries in 1-12

Stage 2 only runs when stage 1 passes.

IMPORTANT: Validation NEVER silently fixes a config.
The persistence layer calls this before storing an income stream or a
subscription; the occurrence generator assumes it has already run.
"""

from typing import Optional

from src.errors import ScheduleValidationError
from src.models.schedule import (
    ScheduleConfig,
    ScheduleType,
    ValidationIssue,
    ValidationResult,
    assert_exhaustive,
)
from src.observability import get_logger


logger = get_logger(__name__)


class ScheduleValidator:
    """Validates a ScheduleConfig by variant, then by field bounds."""

    def _require(self, config: ScheduleConfig, field: str) -> Optional[ValidationIssue]:
        if getattr(config, field) is None:
            return ValidationIssue(
                field=field,
                issue_type="missing",
                message=(
                    f"Missing required field {field} for schedule type "
                    f"{config.schedule_type.value}"
                ),
                suggested_fix=f"Provide {field}",
            )
        return None

    def _require_range(
        self,
        config: ScheduleConfig,
        field_start: str,
        field_end: str,
    ) -> list[ValidationIssue]:
        issues = [
            issue
            for issue in (
                self._require(config, field_start),
                self._require(config, field_end),
            )
            if issue is not None
        ]
        if issues:
            return issues

        if getattr(config, field_start) > getattr(config, field_end):
            issues.append(ValidationIssue(
                field=field_start,
                issue_type="inverted_range",
                message=f"{field_start} must be less than or equal to {field_end}",
                suggested_fix=f"Swap {field_start} and {field_end}",
            ))
        return issues

    def _validate_required(self, config: ScheduleConfig) -> list[ValidationIssue]:
        """Stage 1: fields the schedule type cannot do without."""
        schedule_type = config.schedule_type

        if schedule_type is ScheduleType.FIXED_DATE:
            issue = self._require(config, "day_of_month")
            return [issue] if issue else []
        elif schedule_type is ScheduleType.BUSINESS_DAY:
            issue = self._require(config, "nth_business_day")
            return [issue] if issue else []
        elif schedule_type is ScheduleType.DATE_RANGE:
            return self._require_range(
                config, "month_day_range_start", "month_day_range_end"
            )
        elif schedule_type is ScheduleType.BUSINESS_DAY_RANGE:
            return self._require_range(
                config, "business_day_range_start", "business_day_range_end"
            )
        else:
            assert_exhaustive(schedule_type)

    def _validate_bounds(self, config: ScheduleConfig) -> list[ValidationIssue]:
        """Stage 2: bounds of every field that is present."""
        issues = []

        for field in ("day_of_month", "month_day_range_start", "month_day_range_end"):
            value = getattr(config, field)
            if value is not None and not 1 <= value <= 31:
                issues.append(ValidationIssue(
                    field=field,
                    issue_type="out_of_range",
                    message=f"{field} must be between 1 and 31",
                    suggested_fix="Days past a month's end are clamped to its last day",
                ))

        for field in (
            "nth_business_day",
            "business_day_range_start",
            "business_day_range_end",
        ):
            value = getattr(config, field)
            if value is not None and value <= 0:
                issues.append(ValidationIssue(
                    field=field,
                    issue_type="out_of_range",
                    message=f"{field} must be a positive integer",
                ))

        invalid_months = [m for m in config.active_months if not 1 <= m <= 12]
        if invalid_months:
            issues.append(ValidationIssue(
                field="active_months",
                issue_type="out_of_range",
                message=(
                    "active_months must contain values between 1 and 12, "
                    f"got {invalid_months}"
                ),
            ))

        return issues

    def check(self, config: ScheduleConfig) -> ValidationResult:
        """
        Run both stages and report every issue found.

        Raises:
            UnsupportedScheduleTypeError: schedule_type is outside the enum
        """
        issues = self._validate_required(config)
        required_valid = not issues

        bounds_valid = False
        if required_valid:
            bounds_issues = self._validate_bounds(config)
            issues.extend(bounds_issues)
            bounds_valid = not bounds_issues

        return ValidationResult(
            schedule_type=config.schedule_type,
            required_fields_valid=required_valid,
            bounds_valid=bounds_valid,
            issues=issues,
        )

    def validate(self, config: ScheduleConfig) -> None:
        """
        Raise on the first problem in ``config``.

        Raises:
            ScheduleValidationError: naming the offending field
            UnsupportedScheduleTypeError: schedule_type is outside the enum
        """
        result = self.check(config)
        issue = result.first_issue
        if issue is not None:
            logger.warning(
                "schedule_validation_failed",
                schedule_type=config.schedule_type.value,
                field=issue.field,
                issue_type=issue.issue_type,
                issue_count=len(result.issues),
                validated_at=result.validated_at.isoformat(),
            )
            raise ScheduleValidationError(issue.field, issue.message)


def validate_schedule_config(config: ScheduleConfig) -> None:
    """Validate ``config``, raising ScheduleValidationError on the first issue."""
    ScheduleValidator().validate(config)
