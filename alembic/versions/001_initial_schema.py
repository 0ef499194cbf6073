"""Initial schema — seats.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "seats",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("seat_id", sa.Integer, nullable=False, server_default="0"),
        sa.Column("seat_pos", sa.String(50), nullable=False, server_default=""),
        sa.Column("seat_available", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("seat_book_start_time", sa.DateTime(timezone=True), nullable=True),
        sa.Column("seat_book_end_time", sa.DateTime(timezone=True), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.UniqueConstraint("seat_id", name="uq_seats_seat_id"),
    )


def downgrade() -> None:
    op.drop_table("seats")
