"""Domain Types — shared identity and classification types for the resource layer.

Invariants:
    - RecordId wraps int — storage assigns it, callers never choose it
    - Client-supplied integers never exceed MAX_INT64 before reaching storage
    - All classification states encoded as Enums — no raw string matching

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders (ADR: error bodies are JSON)
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

RecordId = NewType("RecordId", int)

# Largest value a BIGINT column or bind parameter holds
MAX_INT64 = 2**63 - 1


# ─── Enums ───────────────────────────────────────────────────────

class FieldKind(str, Enum):
    """How the query builder and flattener treat a record field."""
    SCALAR = "scalar"
    NESTED = "nested"


class StorageCause(str, Enum):
    """Why a storage call failed — surfaced in logs and the error body."""
    INTEGRITY = "integrity"
    OPERATIONAL = "operational"
    DRIVER = "driver"
    UNKNOWN = "unknown"


class ResourceOperation(str, Enum):
    """Generic operations a resource exposes. Used for error context and logging."""
    LIST = "list"
    GET = "get"
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"
    FIND_ONE = "find_one"
    FIND_ALL = "find_all"
