"""Service test fixtures — operations bound to the seat and test-only record types."""

import pytest

from resourcekit.models.seat import Seat
from resourcekit.schemas.seat import SeatRecord
from resourcekit.services.resource_operations import ResourceOperations
from tests.records import Card, CardRecord, Item, ItemRecord


@pytest.fixture
def seat_ops():
    return ResourceOperations(SeatRecord, Seat)


@pytest.fixture
def item_ops():
    return ResourceOperations(ItemRecord, Item)


@pytest.fixture
def card_ops():
    return ResourceOperations(CardRecord, Card)


@pytest.fixture
async def seeded_seats(test_db, seat_ops):
    """Three seats; the middle one is booked."""
    return [
        await seat_ops.create(test_db, {"seat_id": 1, "seat_pos": "A1", "seat_available": True}),
        await seat_ops.create(test_db, {
            "seat_id": 2, "seat_pos": "A2", "seat_available": False,
            "booking": {
                "seat_book_start_time": "2026-03-01T09:00:00",
                "seat_book_end_time": "2026-03-01T11:00:00",
            },
        }),
        await seat_ops.create(test_db, {"seat_id": 3, "seat_pos": "B1", "seat_available": True}),
    ]
