"""Pagination Resolver — clamps raw page parameters into a safe LIMIT/OFFSET window.

Invariants:
    - limit is always in [1, MAX_PAGE_SIZE]; offset is always in [0, MAX_INT64]
    - Malformed or missing input parses to 0 and degrades to defaults, never raises
    - Integers beyond signed 64-bit saturate at MAX_INT64 (never converted digit by digit)

Design Decisions:
    - Bad pagination must never block the primary query: no error surface at all
    - Clamp order is fixed: size >= 100 first, then size <= 0, then pass-through
    - page_num capped so the derived offset still fits a BIGINT bind parameter
"""

import re
from dataclasses import dataclass

from sqlalchemy import Select

from resourcekit.core.domain_types import MAX_INT64

MAX_PAGE_SIZE = 100
DEFAULT_PAGE_SIZE = 10

_INTEGER = re.compile(r"([+-]?)0*(\d+)")
_MAX_INT64_DIGITS = len(str(MAX_INT64))


@dataclass(frozen=True)
class PageWindow:
    """Derived storage bounds for one request."""
    limit: int
    offset: int


def parse_page_param(raw: str | None) -> int:
    """Parse a query-string integer. Anything non-numeric is 0."""
    if raw is None:
        return 0
    match = _INTEGER.fullmatch(raw.strip())
    if not match:
        return 0
    sign, digits = match.groups()
    if len(digits) > _MAX_INT64_DIGITS:
        value = MAX_INT64
    else:
        value = min(int(digits), MAX_INT64)
    return -value if sign == "-" else value


def resolve_page(raw_size: str | None, raw_num: str | None) -> PageWindow:
    """Derive (limit, offset) from the raw `pagesize` / `pagenum` values."""
    page_size = parse_page_param(raw_size)
    page_num = parse_page_param(raw_num)

    if page_size >= MAX_PAGE_SIZE:
        limit = MAX_PAGE_SIZE
    elif page_size <= 0:
        limit = DEFAULT_PAGE_SIZE
    else:
        limit = page_size

    if page_num <= 0:
        page_num = 1
    page_num = min(page_num, MAX_INT64 // limit + 1)

    return PageWindow(limit=limit, offset=(page_num - 1) * limit)


def apply_window(statement: Select, window: PageWindow) -> Select:
    return statement.offset(window.offset).limit(window.limit)
