"""Record Schemas — pydantic record types decoded from and encoded to request bodies.

Invariants:
    - Every resource schema extends core.record.Record (nested parts extend Embedded)
    - Every field has a default: an omitted field decodes to its zero value

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence (ADR: DDD boundary)
"""
