"""
Booking sources backed by a JSON file or an in-memory list.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Sequence

import pendulum
from pendulum import DateTime

from ..domain.exceptions import BookingSourceError
from ..domain.models import Booking

logger = logging.getLogger(__name__)


class JsonBookingSource:
    """
    Loads existing bookings from a JSON file.

    The file holds a list of objects with ISO-8601 "start" and "end"
    values ("from"/"to" are accepted too). Timestamps without an offset
    are read in the requested timezone.
    """

    def __init__(self, path: Path):
        self.path = Path(path)
        self._entries = self._load_entries()

    def _load_entries(self) -> List[Dict[str, Any]]:
        """Read the raw booking entries from disk."""
        if not self.path.exists():
            raise BookingSourceError(f"Bookings file not found: {self.path}")

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                entries = json.load(f)
        except (OSError, json.JSONDecodeError) as exc:
            raise BookingSourceError(f"Could not read bookings from {self.path}: {exc}") from exc

        if not isinstance(entries, list):
            raise BookingSourceError(f"Bookings file {self.path} must contain a JSON list.")

        return entries

    def get_bookings(
        self,
        start_time: DateTime,
        end_time: DateTime,
        timezone: str,
    ) -> List[Booking]:
        """
        Return bookings overlapping the [start_time, end_time) window.

        Malformed entries are skipped with a warning.
        """
        bookings: List[Booking] = []

        for index, entry in enumerate(self._entries):
            try:
                booking_start = pendulum.parse(entry.get("start", entry.get("from")), tz=timezone)
                booking_end = pendulum.parse(entry.get("end", entry.get("to")), tz=timezone)
                if not isinstance(booking_start, DateTime) or not isinstance(booking_end, DateTime):
                    raise ValueError("start and end must be date-times")
            except (AttributeError, TypeError, ValueError) as exc:
                logger.warning("Skipping invalid booking #%d in %s: %s", index, self.path, exc)
                continue

            if booking_start < end_time and booking_end > start_time:
                bookings.append(Booking(start=booking_start, end=booking_end))

        logger.debug("Loaded %d booking(s) from %s", len(bookings), self.path)
        return bookings


class InMemoryBookingSource:
    """Booking source over a fixed list, for programmatic use."""

    def __init__(self, bookings: Sequence[Booking] = ()):
        self._bookings = list(bookings)

    def get_bookings(
        self,
        start_time: DateTime,
        end_time: DateTime,
        timezone: str,
    ) -> List[Booking]:
        return [
            booking for booking in self._bookings
            if booking.start < end_time and booking.end > start_time
        ]
