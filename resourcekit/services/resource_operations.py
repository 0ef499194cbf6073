"""Resource Operations — list/get/create/update/delete/find for any Record type.

Invariants:
    - Every operation takes the storage handle (AsyncSession) explicitly
    - Decode failures raise DecodeError BEFORE storage is touched
    - Every SQLAlchemyError is rolled back and surfaced as StorageError (never retried)
    - Multi-row reads and find_one order by identity ascending (deterministic tie-break)
    - Update is a FULL REPLACE: fields missing from the body take the record's defaults
    - Update/delete are read-then-act with no concurrency guard; a row deleted between
      the existence check and the commit fails as an ordinary StorageError

Design Decisions:
    - One generic class bound to (record type, ORM model) instead of per-entity handlers
    - Binding validates the record/model column match at construction, so a bad pairing
      fails at startup instead of on the first request
    - No logging here: errors are logged once, at the HTTP boundary (api/error_handlers.py)
"""

import re
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Generic, Mapping, TypeVar

from pydantic import ValidationError
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from resourcekit.core.domain_types import MAX_INT64, RecordId, ResourceOperation
from resourcekit.core.errors import (
    DecodeError, ErrorContext, ResourceNotFoundError, StorageError,
)
from resourcekit.core.pagination import PageWindow, apply_window, resolve_page
from resourcekit.core.query_by_example import apply_predicates, build_predicates
from resourcekit.core.record import IDENTITY_FIELD, Record, check_columns, describe
from resourcekit.infrastructure.database import classify_storage_error

R = TypeVar("R", bound=Record)

Body = bytes | str | Mapping[str, Any]

_RECORD_ID = re.compile(r"[0-9]+")
_MAX_ID_DIGITS = len(str(MAX_INT64))

DELETED_MESSAGE = {"message": "Record deleted successfully"}


class ResourceOperations(Generic[R]):
    """Generic CRUD and query-by-example operations for one record type."""

    def __init__(self, record_type: type[R], model: type, name: str | None = None):
        self.record_type = record_type
        self.model = model
        self.name = name or model.__tablename__
        self.descriptor = describe(record_type)

        columns = model.__table__.c
        if IDENTITY_FIELD not in columns:
            raise TypeError(f"{model.__name__} has no '{IDENTITY_FIELD}' column")
        check_columns(self.descriptor, columns)
        self._identity = columns[IDENTITY_FIELD]

    # ─── Reads ───────────────────────────────────────────────────

    async def list_all(
        self, db: AsyncSession, window: PageWindow | None = None,
    ) -> list[R]:
        """All records; paginated only when a window is given."""
        statement = select(self.model).order_by(self._identity)
        if window is not None:
            statement = apply_window(statement, window)
        async with self._storage(db, ResourceOperation.LIST, "Failed to fetch records"):
            rows = (await db.execute(statement)).scalars().all()
        return [self.descriptor.inflate(row) for row in rows]

    async def get_by_id(self, db: AsyncSession, record_id: int | str) -> R:
        row = await self._load(db, record_id, ResourceOperation.GET)
        return self.descriptor.inflate(row)

    # ─── Writes ──────────────────────────────────────────────────

    async def create(self, db: AsyncSession, body: Body) -> R:
        """Decode and insert. The returned record carries the assigned id."""
        record = self.decode(body, ResourceOperation.CREATE)
        row = self.model(**self.descriptor.flatten(record))
        async with self._storage(
            db, ResourceOperation.CREATE, "Failed to create record",
            data=record.model_dump(mode="json", exclude={IDENTITY_FIELD}),
        ):
            db.add(row)
            await db.commit()
            await db.refresh(row)
        return self.descriptor.inflate(row)

    async def update(
        self, db: AsyncSession, record_id: int | str, body: Body,
    ) -> R:
        """Replace every field of an existing record with the decoded body."""
        row = await self._load(db, record_id, ResourceOperation.UPDATE)
        record = self.decode(body, ResourceOperation.UPDATE)
        async with self._storage(
            db, ResourceOperation.UPDATE, "Failed to update record",
            data=record.model_dump(mode="json", exclude={IDENTITY_FIELD}),
        ):
            for column, value in self.descriptor.flatten(record).items():
                setattr(row, column, value)
            await db.commit()
            await db.refresh(row)
        return self.descriptor.inflate(row)

    async def delete(self, db: AsyncSession, record_id: int | str) -> dict:
        row = await self._load(db, record_id, ResourceOperation.DELETE)
        async with self._storage(db, ResourceOperation.DELETE, "Failed to delete record"):
            await db.delete(row)
            await db.commit()
        return dict(DELETED_MESSAGE)

    # ─── Query by example ────────────────────────────────────────

    async def find_one(self, db: AsyncSession, body: Body) -> R:
        """First record (lowest id) equal to the example on every field."""
        example = self.decode(body, ResourceOperation.FIND_ONE)
        statement = apply_predicates(
            select(self.model), self.model, build_predicates(example),
        ).order_by(self._identity).limit(1)
        async with self._storage(db, ResourceOperation.FIND_ONE, "Failed to find records"):
            row = (await db.execute(statement)).scalars().first()
        if row is None:
            raise ResourceNotFoundError(
                "No matching record found",
                self._context(ResourceOperation.FIND_ONE),
            )
        return self.descriptor.inflate(row)

    async def find_all(
        self, db: AsyncSession, body: Body, window: PageWindow | None = None,
    ) -> list[R]:
        """One page of records equal to the example on every field."""
        example = self.decode(body, ResourceOperation.FIND_ALL)
        statement = apply_predicates(
            select(self.model), self.model, build_predicates(example),
        ).order_by(self._identity)
        statement = apply_window(statement, window or resolve_page(None, None))
        async with self._storage(db, ResourceOperation.FIND_ALL, "Failed to find records"):
            rows = (await db.execute(statement)).scalars().all()
        return [self.descriptor.inflate(row) for row in rows]

    # ─── Availability ────────────────────────────────────────────

    async def check_available(self, db: AsyncSession) -> None:
        """Touch the backing table once. Raises StorageError when it cannot be read."""
        statement = select(self._identity).limit(1)
        async with self._storage(db, ResourceOperation.LIST, "Resource table unavailable"):
            await db.execute(statement)

    # ─── Helpers ─────────────────────────────────────────────────

    def decode(self, body: Body, operation: ResourceOperation) -> R:
        """Decode a request body into the record type or raise DecodeError."""
        try:
            if isinstance(body, (bytes, bytearray, str)):
                return self.record_type.model_validate_json(body)
            return self.record_type.model_validate(body)
        except ValidationError as e:
            details = [
                {
                    "field": ".".join(str(loc) for loc in err["loc"]),
                    "message": err["msg"],
                    "type": err["type"],
                }
                for err in e.errors()
            ]
            first = details[0]
            reason = (
                f"{first['field']}: {first['message']}" if first["field"]
                else first["message"]
            )
            raise DecodeError(reason, details, self._context(operation)) from e

    async def _load(
        self, db: AsyncSession, record_id: int | str, operation: ResourceOperation,
    ) -> Any:
        context = self._context(operation, record_id)
        identity = _parse_record_id(record_id)
        if identity is None:
            raise ResourceNotFoundError(context=context)
        async with self._storage(db, operation, "Failed to fetch records"):
            row = await db.get(self.model, identity)
        if row is None:
            raise ResourceNotFoundError(context=context)
        return row

    @asynccontextmanager
    async def _storage(
        self,
        db: AsyncSession,
        operation: ResourceOperation,
        message: str,
        data: Any = None,
    ) -> AsyncIterator[None]:
        try:
            yield
        except SQLAlchemyError as e:
            await db.rollback()
            raise StorageError(
                message, classify_storage_error(e), data, self._context(operation),
            ) from e

    def _context(
        self, operation: ResourceOperation, record_id: int | str | None = None,
    ) -> ErrorContext:
        return ErrorContext(
            resource=self.name,
            operation=operation.value,
            record_id=None if record_id is None else str(record_id),
        )


def _parse_record_id(record_id: int | str) -> RecordId | None:
    """Path ids are integer literals in [0, MAX_INT64]; anything else matches nothing."""
    if isinstance(record_id, int):
        return RecordId(record_id) if 0 <= record_id <= MAX_INT64 else None
    text = str(record_id).strip()
    if len(text) > _MAX_ID_DIGITS or not _RECORD_ID.fullmatch(text):
        return None
    value = int(text)
    return RecordId(value) if value <= MAX_INT64 else None
