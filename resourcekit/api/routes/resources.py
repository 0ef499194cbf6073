"""Resource Routes — generic CRUD and search endpoints for any Record type.

Invariants:
    - Bodies are read raw and decoded by ResourceOperations (decode errors → 400 DecodeError)
    - Path ids are strings: a non-integer id is a 404, never a validation error
    - `pagesize` / `pagenum` are raw strings; bad values fall back to defaults
    - GET on the collection paginates only when a page parameter is supplied
    - The storage handle comes from the injected get_session dependency

Design Decisions:
    - Raw body over a typed body parameter: create/update/search share one decode path,
      and DecodeError carries the offending field in the "error" message
    - mount_crud / mount_search take a bound ResourceOperations so the app can share
      one instance between its route groups and the readiness check
"""

from typing import AsyncIterator, Callable

from fastapi import APIRouter, Depends, FastAPI, Query, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from resourcekit.api.route_composer import GroupMutator, compose_routes
from resourcekit.core.pagination import resolve_page
from resourcekit.infrastructure.database import get_db
from resourcekit.services.resource_operations import ResourceOperations

SessionProvider = Callable[[], AsyncIterator[AsyncSession]]


def crud_routes(
    operations: ResourceOperations, get_session: SessionProvider = get_db,
) -> GroupMutator:
    """Mutator registering list/get/create/update/delete on a group."""
    record_type = operations.record_type
    tags = [operations.name]

    def register(group: APIRouter) -> APIRouter:

        @group.get("", response_model=list[record_type], tags=tags)
        async def list_records(
            pagesize: str | None = Query(None),
            pagenum: str | None = Query(None),
            db: AsyncSession = Depends(get_session),
        ):
            window = None
            if pagesize is not None or pagenum is not None:
                window = resolve_page(pagesize, pagenum)
            return await operations.list_all(db, window)

        @group.get("/{record_id}", response_model=record_type, tags=tags)
        async def get_record(
            record_id: str, db: AsyncSession = Depends(get_session),
        ):
            return await operations.get_by_id(db, record_id)

        @group.post(
            "", response_model=record_type,
            status_code=status.HTTP_201_CREATED, tags=tags,
        )
        async def create_record(
            request: Request, db: AsyncSession = Depends(get_session),
        ):
            return await operations.create(db, await request.body())

        @group.put("/{record_id}", response_model=record_type, tags=tags)
        async def update_record(
            record_id: str,
            request: Request,
            db: AsyncSession = Depends(get_session),
        ):
            return await operations.update(db, record_id, await request.body())

        @group.delete("/{record_id}", tags=tags)
        async def delete_record(
            record_id: str, db: AsyncSession = Depends(get_session),
        ):
            return await operations.delete(db, record_id)

        return group

    return register


def search_routes(
    operations: ResourceOperations, get_session: SessionProvider = get_db,
) -> GroupMutator:
    """Mutator registering query-by-example find-one and find-all on a group."""
    record_type = operations.record_type
    tags = [operations.name]

    def register(group: APIRouter) -> APIRouter:

        @group.post("", response_model=record_type, tags=tags)
        async def find_record(
            request: Request, db: AsyncSession = Depends(get_session),
        ):
            return await operations.find_one(db, await request.body())

        @group.post("/all", response_model=list[record_type], tags=tags)
        async def find_records(
            request: Request,
            pagesize: str | None = Query(None),
            pagenum: str | None = Query(None),
            db: AsyncSession = Depends(get_session),
        ):
            return await operations.find_all(
                db, await request.body(), resolve_page(pagesize, pagenum),
            )

        return group

    return register


def mount_crud(
    parent: FastAPI | APIRouter,
    path: str,
    operations: ResourceOperations,
    get_session: SessionProvider = get_db,
) -> APIRouter:
    """Mount the five CRUD endpoints for one resource under path."""
    return compose_routes(crud_routes(operations, get_session))(parent, path)


def mount_search(
    parent: FastAPI | APIRouter,
    path: str,
    operations: ResourceOperations,
    get_session: SessionProvider = get_db,
) -> APIRouter:
    """Mount the query-by-example endpoints for one resource under path."""
    return compose_routes(search_routes(operations, get_session))(parent, path)
