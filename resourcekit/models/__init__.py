"""ORM Models — SQLAlchemy declarative models for every mounted resource.

Invariants:
    - All models inherit from Base (db/base.py)
    - Every model has an integer `id` primary key (the record identity)

Design Decisions:
    - One file per entity for locality
    - All models imported here so Base.metadata is complete before create_all/autogenerate
"""

from resourcekit.models.seat import Seat  # noqa: F401
