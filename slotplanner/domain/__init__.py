"""
Domain layer - Pure business logic without external dependencies.
"""

from .exceptions import BookingSourceError, InvalidWeekdayError, SlotPlannerError
from .models import Availability, AvailabilityData, Booking, Slots, TimeInWeek, TimeSlot
from .slot_generator import generate_slots, resolve_window
from .time_utils import build_datetime_from_week, is_overlapping, is_slot_blocked

__all__ = [
    "Availability",
    "AvailabilityData",
    "Booking",
    "BookingSourceError",
    "InvalidWeekdayError",
    "SlotPlannerError",
    "Slots",
    "TimeInWeek",
    "TimeSlot",
    "build_datetime_from_week",
    "generate_slots",
    "is_overlapping",
    "is_slot_blocked",
    "resolve_window",
]
