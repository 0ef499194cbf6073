"""Route Composer — threads a child router through group mutators and mounts it.

Invariants:
    - Mutators run strictly in the order given; each receives the previous one's return
    - The composer registers nothing itself: it only creates, threads and includes
    - The group is included into the parent AFTER the last mutator ran

Design Decisions:
    - Callers finish registering through mutators, not through the returned router:
      whether routes added after include_router reach the parent depends on the
      FastAPI version (older releases copy routes, newer ones include lazily)
"""

import logging
from typing import Callable

from fastapi import APIRouter, FastAPI

logger = logging.getLogger(__name__)

GroupMutator = Callable[[APIRouter], APIRouter]
Mount = Callable[[FastAPI | APIRouter, str], APIRouter]


def normalize_prefix(path: str) -> str:
    """'seats', '/seats/' and '/seats' all become '/seats'; '' and '/' become ''."""
    path = path.strip().strip("/")
    return f"/{path}" if path else ""


def compose_routes(*mutators: GroupMutator) -> Mount:
    """Compress a batch of mutators into one mount(parent, path) function."""

    def mount(parent: FastAPI | APIRouter, path: str) -> APIRouter:
        group = APIRouter(prefix=normalize_prefix(path))
        for mutator in mutators:
            group = mutator(group)
        parent.include_router(group)
        logger.debug(f"Mounted {len(group.routes)} routes under '{group.prefix}'")
        return group

    return mount
