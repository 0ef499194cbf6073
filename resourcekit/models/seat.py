"""Seat ORM — persists the seat resource exposed through generic operations.

Invariants:
    - id is an integer primary key assigned by storage
    - seat_id is unique (a duplicate insert is an integrity StorageError)
    - Booking window columns are flat: the record nests them, the table does not

Design Decisions:
    - Column names equal record field names: query-by-example maps field → column 1:1
    - created_at kept out of the record: storage bookkeeping, never filtered on
"""

from datetime import datetime, timezone

from sqlalchemy import Boolean, DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from resourcekit.db.base import Base


class Seat(Base):
    """A bookable seat."""
    __tablename__ = "seats"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    seat_id: Mapped[int] = mapped_column(
        Integer, nullable=False, unique=True, default=0,
    )
    seat_pos: Mapped[str] = mapped_column(String(50), nullable=False, default="")
    seat_available: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False,
    )
    seat_book_start_time: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True,
    )
    seat_book_end_time: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
