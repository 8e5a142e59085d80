"""
Adapters layer - Sources of existing bookings.
"""

from .json_booking_source import InMemoryBookingSource, JsonBookingSource

__all__ = ["InMemoryBookingSource", "JsonBookingSource"]
