"""
Tests for domain models.
"""

import pendulum
import pytest
from dataclasses import FrozenInstanceError

from slotplanner.domain.models import Availability, AvailabilityData, Booking, TimeInWeek, TimeSlot


class TestTimeInWeek:
    """Tests for TimeInWeek model."""

    def test_minute_defaults_to_zero(self):
        assert TimeInWeek(weekday=6, hour=18).minute == 0

    def test_is_immutable(self):
        time_in_week = TimeInWeek(weekday=6, hour=18)

        with pytest.raises(FrozenInstanceError):
            time_in_week.hour = 19


class TestAvailability:
    """Tests for Availability model."""

    def test_str(self):
        window = Availability(
            start=TimeInWeek(weekday=6, hour=22),
            end=TimeInWeek(weekday=7, hour=2, minute=30),
        )

        assert str(window) == "6 22:00 - 7 02:30"


class TestTimeSlot:
    """Tests for TimeSlot model."""

    slot = TimeSlot(
        start=pendulum.parse("2024-12-21 23:00", tz="Europe/Helsinki"),
        end=pendulum.parse("2024-12-22 00:30", tz="Europe/Helsinki"),
    )

    def test_duration_minutes(self):
        assert self.slot.duration_minutes() == 90

    def test_fractional_duration_minutes(self):
        slot = TimeSlot(start=self.slot.start, end=self.slot.start.add(seconds=1350))

        assert slot.duration_minutes() == 22.5

    def test_date_key_uses_start(self):
        assert self.slot.date_key() == "2024-12-21"

    def test_to_dict(self):
        assert self.slot.to_dict() == {
            "start": "2024-12-21T23:00:00+02:00",
            "end": "2024-12-22T00:30:00+02:00",
        }

    def test_str(self):
        assert str(self.slot) == "2024-12-21 23:00 - 00:30"

    def test_equality_compares_instants(self):
        utc_slot = TimeSlot(
            start=pendulum.datetime(2024, 12, 21, 21, 0, tz="UTC"),
            end=pendulum.datetime(2024, 12, 21, 22, 30, tz="UTC"),
        )

        assert utc_slot == self.slot

    def test_booking_shares_the_slot_shape(self):
        assert Booking is TimeSlot


class TestAvailabilityData:
    """Tests for AvailabilityData model."""

    def test_bookings_default_to_empty(self):
        data = AvailabilityData(
            calendar_length_days=7,
            availability_windows=[],
            duration_minutes=60,
            must_book_hours_before=1,
            timezone="Europe/Helsinki",
        )

        assert data.bookings == []
