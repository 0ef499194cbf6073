"""Infrastructure Layer — storage handle lifecycle and logging setup.

Invariants:
    - Infrastructure depends on core/ only for error and classification types
    - Driver exceptions never cross this layer unclassified

Design Decisions:
    - Storage and logging isolated here so api/ and services/ stay transport-agnostic
"""
