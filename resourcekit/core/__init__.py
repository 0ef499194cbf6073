"""Core Layer — record introspection, query-by-example, pagination, errors.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - Nothing in core/ performs IO: statements are built here, executed elsewhere

Design Decisions:
    - Functional core separated from imperative shell (ADR: impureim sandwich)
"""
