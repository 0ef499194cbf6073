"""Seat Record — the request/response shape of the seat resource.

Invariants:
    - BookingWindow is nested in the record but flattened onto the seats table
    - Every field defaults to its zero value, so a partial body always decodes
"""

from datetime import datetime

from pydantic import Field

from resourcekit.core.record import Embedded, Record


class BookingWindow(Embedded):
    """When a seat is booked. Both ends unset means not booked."""
    seat_book_start_time: datetime | None = None
    seat_book_end_time: datetime | None = None


class SeatRecord(Record):
    seat_id: int = 0
    seat_pos: str = ""
    seat_available: bool = False
    booking: BookingWindow = Field(default_factory=BookingWindow)
