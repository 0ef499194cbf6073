"""Database Metadata — SQLAlchemy declarative Base shared by every ORM model.

Invariants:
    - All tables register on Base.metadata (alembic and tests read it from here)
"""
