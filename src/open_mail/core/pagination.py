"""Pagination window resolution and display ranges."""

import math
from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional

DEFAULT_LIMIT = 20


@dataclass(frozen=True)
class PaginationWindow:
    """Canonical ``(limit, offset, page)`` triple."""

    limit: int
    offset: int
    page: int

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class RangeInfo:
    """The slice of a result set actually shown."""

    start: int
    end: int
    total: int
    showing: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def parse_pagination(
    limit: Optional[int] = None,
    offset: Optional[int] = None,
    page: Optional[int] = None,
) -> PaginationWindow:
    """Resolve raw pagination inputs into a window.

    An explicit offset always wins: the page is derived from it and any
    page argument is ignored. Out-of-range values are clamped, never
    rejected.
    """
    limit = max(DEFAULT_LIMIT if limit is None else limit, 1)

    if offset is not None:
        offset = max(offset, 0)
        page = offset // limit + 1
    elif page is not None:
        page = max(page, 1)
        offset = (page - 1) * limit
    else:
        offset = 0
        page = 1

    return PaginationWindow(limit=limit, offset=offset, page=page)


def calculate_range(offset: int, limit: int, total: int) -> RangeInfo:
    """Describe which items ``offset``/``limit`` cover out of ``total``."""
    if total == 0 or offset >= total:
        return RangeInfo(start=0, end=0, total=total, showing="0")

    start = offset + 1
    end = min(offset + limit, total)
    return RangeInfo(start=start, end=end, total=total, showing=f"{start}-{end}")


def total_pages(total: int, limit: int) -> int:
    """Number of pages needed to show ``total`` items, ``limit`` at a time."""
    if total <= 0:
        return 0
    return math.ceil(total / max(limit, 1))
