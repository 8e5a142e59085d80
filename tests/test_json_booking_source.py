"""
Tests for the booking source adapters.
"""

import json
import logging
from pathlib import Path

import pendulum
import pytest

from slotplanner.adapters.json_booking_source import InMemoryBookingSource, JsonBookingSource
from slotplanner.domain.exceptions import BookingSourceError
from slotplanner.domain.models import Booking

TZ = "Europe/Helsinki"

WINDOW_START = pendulum.datetime(2024, 12, 18, tz=TZ)
WINDOW_END = pendulum.datetime(2024, 12, 25, tz=TZ).end_of("day")


def _write(tmp_path, entries) -> Path:
    path = tmp_path / "bookings.json"
    path.write_text(json.dumps(entries), encoding="utf-8")
    return path


class TestJsonBookingSource:
    """Tests for JsonBookingSource."""

    def test_loads_bookings_with_offsets(self, tmp_path):
        path = _write(tmp_path, [
            {"start": "2024-12-21T18:00:00+02:00", "end": "2024-12-21T19:00:00+02:00"},
        ])

        bookings = JsonBookingSource(path).get_bookings(WINDOW_START, WINDOW_END, TZ)

        assert bookings == [
            Booking(
                start=pendulum.datetime(2024, 12, 21, 18, tz=TZ),
                end=pendulum.datetime(2024, 12, 21, 19, tz=TZ),
            )
        ]

    def test_naive_timestamps_use_requested_timezone(self, tmp_path):
        path = _write(tmp_path, [{"from": "2024-12-21 18:00", "to": "2024-12-21 19:00"}])

        bookings = JsonBookingSource(path).get_bookings(WINDOW_START, WINDOW_END, TZ)

        assert bookings[0].start == pendulum.datetime(2024, 12, 21, 16, tz="UTC")

    def test_only_overlapping_bookings_are_returned(self, tmp_path):
        path = _write(tmp_path, [
            {"start": "2024-12-10T10:00:00+02:00", "end": "2024-12-10T11:00:00+02:00"},
            {"start": "2024-12-17T23:00:00+02:00", "end": "2024-12-18T01:00:00+02:00"},
            {"start": "2024-12-30T10:00:00+02:00", "end": "2024-12-30T11:00:00+02:00"},
        ])

        bookings = JsonBookingSource(path).get_bookings(WINDOW_START, WINDOW_END, TZ)

        assert len(bookings) == 1
        assert bookings[0].end == pendulum.datetime(2024, 12, 18, 1, tz=TZ)

    def test_invalid_entries_are_skipped(self, tmp_path, caplog):
        path = _write(tmp_path, [
            {"start": "not a date", "end": "2024-12-21T19:00:00+02:00"},
            {"end": "2024-12-21T19:00:00+02:00"},
            "garbage",
            {"start": "P1D", "end": "P2D"},
            {"start": "2024-12-21T18:00:00+02:00", "end": "2024-12-21T19:00:00+02:00"},
        ])

        with caplog.at_level(logging.WARNING):
            bookings = JsonBookingSource(path).get_bookings(WINDOW_START, WINDOW_END, TZ)

        assert len(bookings) == 1
        assert "Skipping invalid booking" in caplog.text
        assert caplog.text.count("Skipping invalid booking") == 4

    def test_missing_file(self, tmp_path):
        with pytest.raises(BookingSourceError, match="not found"):
            JsonBookingSource(tmp_path / "missing.json")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "bookings.json"
        path.write_text("[{", encoding="utf-8")

        with pytest.raises(BookingSourceError, match="Could not read bookings"):
            JsonBookingSource(path)

    def test_root_must_be_list(self, tmp_path):
        path = _write(tmp_path, {"start": "2024-12-21T18:00:00+02:00"})

        with pytest.raises(BookingSourceError, match="must contain a JSON list"):
            JsonBookingSource(path)


class TestInMemoryBookingSource:
    """Tests for InMemoryBookingSource."""

    def test_filters_by_window(self):
        inside = Booking(
            start=pendulum.datetime(2024, 12, 21, 18, tz=TZ),
            end=pendulum.datetime(2024, 12, 21, 19, tz=TZ),
        )
        outside = Booking(
            start=pendulum.datetime(2025, 1, 5, 18, tz=TZ),
            end=pendulum.datetime(2025, 1, 5, 19, tz=TZ),
        )

        source = InMemoryBookingSource([inside, outside])

        assert source.get_bookings(WINDOW_START, WINDOW_END, TZ) == [inside]

    def test_empty_by_default(self):
        assert InMemoryBookingSource().get_bookings(WINDOW_START, WINDOW_END, TZ) == []
