"""resourcekit — generic CRUD and query-by-example HTTP resources over SQLAlchemy.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)

Design Decisions:
    - Empty __init__.py: explicit imports only, no star exports
"""
