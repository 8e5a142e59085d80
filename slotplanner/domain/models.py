"""
Domain models for weekly availability and slot calculations.
"""

from dataclasses import dataclass, field
from typing import Dict, List

from pendulum import DateTime


@dataclass(frozen=True)
class TimeInWeek:
    """
    A recurring point in the week, independent of any timezone.

    weekday follows ISO numbering: 1=Monday, 7=Sunday.
    """
    weekday: int
    hour: int
    minute: int = 0


@dataclass(frozen=True)
class Availability:
    """
    One recurring weekly window.

    The end may realize earlier than the start (overnight window), in which
    case it is pushed to the following day when resolved.
    """
    start: TimeInWeek
    end: TimeInWeek

    def __str__(self) -> str:
        return (
            f"{self.start.weekday} {self.start.hour:02d}:{self.start.minute:02d} - "
            f"{self.end.weekday} {self.end.hour:02d}:{self.end.minute:02d}"
        )


@dataclass(frozen=True)
class TimeSlot:
    """
    A concrete, timezone-aware interval [start, end).
    """
    start: DateTime
    end: DateTime

    def duration_minutes(self) -> float:
        """Return the duration in minutes."""
        return (self.end - self.start).total_seconds() / 60

    def date_key(self) -> str:
        """Calendar date of the start, as YYYY-MM-DD in the slot's own zone."""
        return self.start.to_date_string()

    def to_dict(self) -> Dict[str, str]:
        return {"start": self.start.to_iso8601_string(), "end": self.end.to_iso8601_string()}

    def __str__(self) -> str:
        return f"{self.start.format('YYYY-MM-DD HH:mm')} - {self.end.format('HH:mm')}"


# Bookings share the slot shape; they are intervals that block slots.
Booking = TimeSlot

# Calendar date (YYYY-MM-DD) -> slots in generation order.
Slots = Dict[str, List[TimeSlot]]


@dataclass
class AvailabilityData:
    """
    Everything needed to compute slots for one resource.
    """
    calendar_length_days: int
    availability_windows: List[Availability]
    duration_minutes: float
    must_book_hours_before: float
    timezone: str
    bookings: List[Booking] = field(default_factory=list)
