"""
Planner Core Errors

Every failure in the core is raised synchronously at the point of detection.
Nothing here is retried (there is no I/O to retry) and nothing is swallowed.

The HTTP layer maps these by ``code``:
- INVALID_ARGUMENT    -> client error (bad input, missing schedule fields)
- UNSUPPORTED_VARIANT -> internal error (unreachable in a correct build)
"""

from typing import Optional


class PlannerError(Exception):
    """Base exception for planner core errors."""

    code = "PLANNER_ERROR"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidArgumentError(PlannerError, ValueError):
    """Malformed or out-of-range input to a calendar primitive or the planner."""

    code = "INVALID_ARGUMENT"

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


class ScheduleValidationError(InvalidArgumentError):
    """A schedule config is missing a required field or has a bad value."""

    def __init__(self, field: str, message: str):
        super().__init__(message, field=field)

    def to_dict(self) -> dict:
        return {"error": self.code, "field": self.field, "message": self.message}


class UnsupportedScheduleTypeError(PlannerError):
    """
    Raised for a schedule type outside the closed ScheduleType enum.

    Treated as a programming error, not a user error.
    """

    code = "UNSUPPORTED_VARIANT"
