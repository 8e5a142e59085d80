"""
Time arithmetic helpers shared by the slot generator.
"""

from typing import Iterable

from pendulum import DateTime

from .exceptions import InvalidWeekdayError
from .models import TimeInWeek, TimeSlot


def validate_weekday(weekday: int) -> None:
    """Raise InvalidWeekdayError unless weekday is in 1..7."""
    if not 1 <= weekday <= 7:
        raise InvalidWeekdayError(weekday)


def build_datetime_from_week(base_date: DateTime, time_in_week: TimeInWeek) -> DateTime:
    """
    Project a weekday and time of day onto the ISO week of base_date.

    The timezone of base_date is kept; seconds and microseconds are zeroed.

    Raises:
        InvalidWeekdayError: If the weekday is outside 1..7
    """
    validate_weekday(time_in_week.weekday)

    day = base_date.add(days=time_in_week.weekday - base_date.isoweekday())
    return day.set(
        hour=time_in_week.hour,
        minute=time_in_week.minute or 0,
        second=0,
        microsecond=0,
    )


def is_overlapping(current_slot: TimeSlot, booked_slot: TimeSlot) -> bool:
    """Half-open overlap test; ranges that only touch do not overlap."""
    return current_slot.start < booked_slot.end and booked_slot.start < current_slot.end


def is_slot_blocked(slot: TimeSlot, existing_bookings: Iterable[TimeSlot]) -> bool:
    """Check if a slot conflicts with any of the existing bookings."""
    return any(is_overlapping(slot, booking) for booking in existing_bookings)
