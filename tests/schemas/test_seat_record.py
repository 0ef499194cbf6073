"""Seat Record — defaults and nested decoding.

Invariants:
    - An empty body decodes to the all-zero record
    - The booking window decodes as a nested record
"""

from datetime import datetime

import pytest
from pydantic import ValidationError

from resourcekit.schemas.seat import BookingWindow, SeatRecord


def test_empty_body_decodes_to_zero_values():
    """An empty object decodes to the all-zero seat."""
    seat = SeatRecord.model_validate({})
    assert seat.id is None
    assert seat.seat_id == 0
    assert seat.seat_pos == ""
    assert seat.seat_available is False
    assert seat.booking == BookingWindow()


def test_booking_window_decodes_nested():
    """The booking window decodes from a nested JSON object."""
    seat = SeatRecord.model_validate_json(
        '{"booking": {"seat_book_start_time": "2026-01-02T03:04:05"}}',
    )
    assert seat.booking.seat_book_start_time == datetime(2026, 1, 2, 3, 4, 5)
    assert seat.booking.seat_book_end_time is None


def test_wrong_type_rejected():
    """A mistyped field fails validation."""
    with pytest.raises(ValidationError):
        SeatRecord.model_validate({"seat_available": "sometimes"})


def test_default_booking_windows_are_independent():
    """Each seat gets its own default booking window."""
    a, b = SeatRecord(), SeatRecord()
    assert a.booking is not b.booking
