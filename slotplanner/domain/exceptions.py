"""
Domain-specific exception hierarchy for the slot planner application.
"""


class SlotPlannerError(Exception):
    """Base class for all application-level errors."""


class InvalidWeekdayError(SlotPlannerError, ValueError):
    """Raised when a weekday is outside 1 (Monday) .. 7 (Sunday)."""

    def __init__(self, weekday: int):
        self.weekday = weekday
        super().__init__(
            f"Invalid weekday: {weekday}. "
            "Weekday must be between 1 (Monday) and 7 (Sunday)."
        )


class BookingSourceError(SlotPlannerError):
    """Raised when booking data cannot be read or parsed."""
