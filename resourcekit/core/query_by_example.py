"""Query-By-Example — turns a populated record into a conjunction of equality predicates.

Invariants:
    - EVERY scalar field participates, zero/empty/None values included
      (an unset field and an explicit zero value are indistinguishable after decoding)
    - Nested records are flattened using their own field names, no path prefix
    - Predicates come out in field declaration order, depth-first
    - Identity is never a predicate (it is not a descriptor field)

Design Decisions:
    - build_predicates is pure (no SQLAlchemy): the statement is only touched by
      apply_predicates, so the builder is testable without a database
    - None compares with IS NULL (SQLAlchemy renders `column == None` that way)
"""

from dataclasses import dataclass
from typing import Any

from sqlalchemy import Select

from resourcekit.core.domain_types import FieldKind
from resourcekit.core.record import Embedded, RecordDescriptor, describe


@dataclass(frozen=True)
class Predicate:
    """Single equality condition: column `field` must equal `value`."""
    field: str
    value: Any
    operator: str = "eq"


def build_predicates(example: Embedded) -> list[Predicate]:
    """Convert an example record into predicates, recursing into nested records."""
    return _walk(describe(type(example)), example)


def _walk(descriptor: RecordDescriptor, instance: Any) -> list[Predicate]:
    predicates: list[Predicate] = []
    for f in descriptor.fields:
        value = f.value_of(instance)
        if f.kind is FieldKind.NESTED:
            predicates.extend(_walk(f.nested, value))
        else:
            predicates.append(Predicate(f.name, value))
    return predicates


def apply_predicates(
    statement: Select, model: type, predicates: list[Predicate],
) -> Select:
    """Add one WHERE clause per predicate (implicit AND)."""
    columns = model.__table__.c
    for p in predicates:
        if p.field not in columns:
            raise TypeError(f"{model.__name__} has no column '{p.field}'")
        statement = statement.where(columns[p.field] == p.value)
    return statement
