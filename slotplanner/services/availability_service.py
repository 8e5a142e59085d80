"""
Application service for proposing bookable slots.

The service coordinates fetching existing bookings via a booking source
adapter and delegates the actual slot generation to the domain-level
``generate_slots``. This keeps the CLI thin and improves testability by
allowing the booking dependency to be stubbed via a simple protocol.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Protocol

import pendulum
from pendulum import DateTime

from ..config import AppConfig
from ..domain.models import AvailabilityData, Booking, Slots
from ..domain.slot_generator import generate_slots

logger = logging.getLogger(__name__)


class BookingSourceProtocol(Protocol):
    """Protocol describing the booking source behaviour needed by the service."""

    def get_bookings(
        self,
        start_time: DateTime,
        end_time: DateTime,
        timezone: str,
    ) -> List[Booking]:
        """Return bookings overlapping the given window."""


class AvailabilityService:
    """
    Orchestrates booking retrieval and slot generation.
    """

    def __init__(self, booking_source: BookingSourceProtocol) -> None:
        self._booking_source = booking_source

    def find_slots(
        self,
        *,
        now: DateTime,
        config: AppConfig,
        duration_minutes: Optional[int] = None,
        must_book_hours_before: Optional[float] = None,
        calendar_length_days: Optional[int] = None,
    ) -> Slots:
        """
        Fetch bookings, assemble availability data and generate slots.

        Overrides fall back to the configured values when omitted.
        """
        days = calendar_length_days if calendar_length_days is not None else config.calendar_length_days

        bookings = self.fetch_bookings(
            now=now,
            timezone=config.timezone,
            calendar_length_days=days,
        )
        data = self.build_availability_data(
            config=config,
            bookings=bookings,
            duration_minutes=duration_minutes,
            must_book_hours_before=must_book_hours_before,
            calendar_length_days=days,
        )
        return self.calculate_slots(now=now, data=data)

    def fetch_bookings(
        self,
        *,
        now: DateTime,
        timezone: str,
        calendar_length_days: int,
    ) -> List[Booking]:
        """Fetch bookings that can affect the generated calendar."""
        local_now = pendulum.instance(now).in_timezone(timezone)
        start_time = local_now.start_of("day")
        end_time = local_now.add(days=calendar_length_days).end_of("day")

        bookings = self._booking_source.get_bookings(
            start_time=start_time,
            end_time=end_time,
            timezone=timezone,
        )
        logger.debug("Fetched %d booking(s) between %s and %s", len(bookings), start_time, end_time)
        return bookings

    @staticmethod
    def build_availability_data(
        *,
        config: AppConfig,
        bookings: List[Booking],
        duration_minutes: Optional[int] = None,
        must_book_hours_before: Optional[float] = None,
        calendar_length_days: Optional[int] = None,
    ) -> AvailabilityData:
        """Map configuration plus bookings onto the domain input."""
        return AvailabilityData(
            calendar_length_days=(
                calendar_length_days if calendar_length_days is not None else config.calendar_length_days
            ),
            availability_windows=config.to_availability_windows(),
            duration_minutes=duration_minutes if duration_minutes is not None else config.duration_minutes,
            must_book_hours_before=(
                must_book_hours_before if must_book_hours_before is not None else config.must_book_hours_before
            ),
            timezone=config.timezone,
            bookings=list(bookings),
        )

    def calculate_slots(self, *, now: DateTime, data: AvailabilityData) -> Slots:
        """Generate slots from fully assembled availability data."""
        return generate_slots(now, data)
