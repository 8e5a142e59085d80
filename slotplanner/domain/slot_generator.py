"""
Core business logic for generating bookable time slots.

This is the heart of the application - pure domain logic without any
external dependencies (no API calls, no database, no I/O).

Algorithm:
1. Walk the calendar day by day, starting from "now"'s day
2. For each day, pick the availability windows anchored on that weekday
3. Resolve each window to concrete datetimes and clamp it to the horizon
4. Cut the window into back-to-back slots of the requested duration
5. Drop slots that overlap a booking or start too soon
6. Group the remaining slots by their start date
"""

import logging
from typing import Iterable, List, Tuple

import pendulum
from pendulum import DateTime

from .models import Availability, AvailabilityData, Booking, Slots, TimeSlot
from .time_utils import build_datetime_from_week, is_slot_blocked, validate_weekday

logger = logging.getLogger(__name__)


def generate_slots(now: DateTime, availability_data: AvailabilityData) -> Slots:
    """
    Return the available slots for the given availability data.

    Args:
        now: Reference instant; any timezone
        availability_data: Windows, bookings and constraints for one resource

    Returns:
        Mapping of YYYY-MM-DD (in availability_data.timezone) to the slots
        starting on that date, in chronological order

    Raises:
        InvalidWeekdayError: If any window uses a weekday outside 1..7
    """
    result: Slots = {}
    data = availability_data

    if data.duration_minutes <= 0:
        return result

    for window in data.availability_windows:
        validate_weekday(window.start.weekday)
        validate_weekday(window.end.weekday)

    start_date = pendulum.instance(now).in_timezone(data.timezone)
    bookings = [
        Booking(
            start=pendulum.instance(b.start).in_timezone(data.timezone),
            end=pendulum.instance(b.end).in_timezone(data.timezone),
        )
        for b in data.bookings
    ]

    for day_offset in range(data.calendar_length_days):
        current_day = start_date.add(days=day_offset)
        day_slots = _generate_day_slots(
            current_day=current_day,
            availability_windows=data.availability_windows,
            duration_minutes=data.duration_minutes,
            must_book_hours_before=data.must_book_hours_before,
            now=start_date,
            bookings=bookings,
            calendar_length_days=data.calendar_length_days,
        )

        for slot in day_slots:
            result.setdefault(slot.date_key(), []).append(slot)

    # Several windows on one weekday may be listed out of order.
    for day_slots in result.values():
        day_slots.sort(key=lambda s: s.start)

    logger.debug(
        "Generated %d slot(s) over %d day(s) in %s",
        sum(len(slots) for slots in result.values()),
        data.calendar_length_days,
        data.timezone,
    )
    return result


def resolve_window(
    current_day: DateTime,
    availability: Availability,
    now: DateTime,
    calendar_length_days: int,
) -> Tuple[DateTime, DateTime] | None:
    """
    Resolve a weekly window to concrete start and end datetimes for a day.

    An end that realizes before the start (overnight windows, windows
    ending at 00:00) is moved to the following day. The result is
    clamped to [start of now's day, end of day now + calendar_length_days].

    Returns:
        (window_start, window_end), or None if the clamped window does not
        touch current_day at all
    """
    window_start = build_datetime_from_week(current_day, availability.start)
    window_end = build_datetime_from_week(current_day, availability.end)

    # Overnight window, including one ending at 00:00
    if window_start > window_end:
        window_end = window_end.add(days=1)

    window_start = max(window_start, now.start_of("day"))

    # The horizon is anchored on now's time of day, not on midnight.
    max_end = now.add(days=calendar_length_days).end_of("day")
    window_end = min(window_end, max_end)

    if current_day.end_of("day") < window_start or current_day.start_of("day") > window_end:
        return None

    return window_start, window_end


def _generate_day_slots(
    *,
    current_day: DateTime,
    availability_windows: Iterable[Availability],
    duration_minutes: float,
    must_book_hours_before: float,
    now: DateTime,
    bookings: List[Booking],
    calendar_length_days: int,
) -> List[TimeSlot]:
    """
    Generate the admitted slots for windows anchored on current_day.
    """
    slots: List[TimeSlot] = []

    for availability in availability_windows:
        if availability.start.weekday != current_day.isoweekday():
            continue

        resolved = resolve_window(current_day, availability, now, calendar_length_days)
        if resolved is None:
            logger.debug("Window %s does not touch %s", availability, current_day.to_date_string())
            continue

        window_start, window_end = resolved
        slot_start = window_start

        while slot_start.add(minutes=duration_minutes) <= window_end:
            slot_end = slot_start.add(minutes=duration_minutes)
            slot = TimeSlot(start=slot_start, end=slot_end)

            hours_ahead = (slot_start - now).total_seconds() / 3600
            if not is_slot_blocked(slot, bookings) and hours_ahead >= must_book_hours_before:
                slots.append(slot)

            slot_start = slot_end

    return slots
