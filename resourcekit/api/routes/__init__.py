"""Route Modules — generic resource mutators and operational health checks.

Invariants:
    - Routes never contain business logic (delegate to services)
    - Mounting happens explicitly in main.py

Design Decisions:
    - Explicit registration in main.py over auto-discovery
"""
