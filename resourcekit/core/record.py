"""Record & Record Descriptor — the introspectable view every generic operation consumes.

Invariants:
    - Every resource record type extends Record; records nested inside it extend Embedded
    - `id` is implicit and storage-assigned: never part of a descriptor's fields
    - Descriptors are built lazily, once per type, and are read-only afterward
    - Fields are enumerated in declaration order
    - Nested record names are NOT prefixed — two nested records with a same-named
      field map to the same column (later field wins when flattening)

Design Decisions:
    - Descriptor derived from pydantic model_fields: declaration order and annotations
      come for free, no hand-written visitor per record type
    - Record types are acyclic by construction, so recursion needs no depth guard
"""

import typing
from dataclasses import dataclass
from functools import cache
from types import UnionType
from typing import Any, Mapping

from pydantic import BaseModel

from resourcekit.core.domain_types import FieldKind

IDENTITY_FIELD = "id"


class Embedded(BaseModel):
    """Base class for records nested inside another record (no identity)."""


class Record(Embedded):
    """Base class for every record type exposed through generic operations."""

    id: int | None = None


@dataclass(frozen=True)
class FieldDescriptor:
    """One field of a record type: name, kind, and nested descriptor if any."""
    name: str
    kind: FieldKind
    optional: bool = False
    nested: "RecordDescriptor | None" = None

    def value_of(self, instance: Any) -> Any:
        """Read this field from an instance. A missing instance reads as None."""
        if instance is None:
            return None
        return getattr(instance, self.name)


@dataclass(frozen=True)
class RecordDescriptor:
    """Read-only field table for one Record type."""
    record_type: type[Embedded]
    fields: tuple[FieldDescriptor, ...]

    def column_names(self) -> list[str]:
        """Flattened scalar names in declaration order, duplicates collapsed."""
        names: list[str] = []
        for f in self.fields:
            candidates = (
                f.nested.column_names() if f.kind is FieldKind.NESTED else [f.name]
            )
            names.extend(n for n in candidates if n not in names)
        return names

    def flatten(self, instance: Embedded | None) -> dict[str, Any]:
        """Map an instance onto flat column values (identity excluded)."""
        values: dict[str, Any] = {}
        for f in self.fields:
            value = f.value_of(instance)
            if f.kind is FieldKind.NESTED:
                values.update(f.nested.flatten(value))
            else:
                values[f.name] = value
        return values

    def inflate(self, row: Any) -> Record:
        """Rebuild a record (with identity) from a row carrying flat columns."""
        data = self._collect(row)
        data[IDENTITY_FIELD] = getattr(row, IDENTITY_FIELD, None)
        return self.record_type.model_validate(data)

    def _collect(self, row: Any) -> dict[str, Any]:
        data: dict[str, Any] = {}
        for f in self.fields:
            if f.kind is FieldKind.NESTED:
                nested = f.nested._collect(row)
                if f.optional and all(v is None for v in nested.values()):
                    data[f.name] = None
                else:
                    data[f.name] = nested
            else:
                data[f.name] = getattr(row, f.name)
        return data


def _unwrap_optional(annotation: Any) -> tuple[Any, bool]:
    """Strip `X | None` / Optional[X] down to X."""
    origin = typing.get_origin(annotation)
    if origin is typing.Union or origin is UnionType:
        args = [a for a in typing.get_args(annotation) if a is not type(None)]
        if len(args) == 1:
            return args[0], True
    return annotation, False


def _is_record_type(annotation: Any) -> bool:
    return isinstance(annotation, type) and issubclass(annotation, Embedded)


@cache
def describe(record_type: type) -> RecordDescriptor:
    """Build (once) the descriptor for a Record type."""
    if not _is_record_type(record_type):
        raise TypeError(f"{record_type!r} is not a record type")

    fields = []
    for name, info in record_type.model_fields.items():
        if name == IDENTITY_FIELD:
            continue
        annotation, optional = _unwrap_optional(info.annotation)
        if _is_record_type(annotation):
            fields.append(FieldDescriptor(
                name, FieldKind.NESTED, optional, describe(annotation),
            ))
        else:
            fields.append(FieldDescriptor(name, FieldKind.SCALAR, optional))
    return RecordDescriptor(record_type, tuple(fields))


def check_columns(descriptor: RecordDescriptor, columns: Mapping[str, Any]) -> None:
    """Fail fast when a record field has no backing column."""
    missing = [n for n in descriptor.column_names() if n not in columns]
    if missing:
        raise TypeError(
            f"{descriptor.record_type.__name__} fields without columns: "
            f"{', '.join(missing)}",
        )
