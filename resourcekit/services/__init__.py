"""Services Layer — generic resource operations over an injected storage handle.

Invariants:
    - Services receive the AsyncSession as an argument, never from a global
    - Services raise core errors; mapping to HTTP happens in api/

Design Decisions:
    - One generic operations class instead of one handler module per entity
"""
