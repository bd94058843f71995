"""
Pagination helpers shared by every list query.

Normalizes limit/offset into a bounded window and wraps a page of rows with
count / has-more metadata. Works the same for any item type.
"""

from dataclasses import dataclass
from typing import Generic, List, Optional, Tuple, TypeVar

from sqlalchemy.orm import Query

T = TypeVar("T")

DEFAULT_LIMIT = 10
MAX_LIMIT = 100


@dataclass
class Page(Generic[T]):
    """One window of a list query."""
    items: List[T]
    total_count: int
    has_more: bool
    limit: int
    offset: int


def get_pagination_params(limit: Optional[int] = None,
                          offset: Optional[int] = None) -> Tuple[int, int]:
    """
    Clamp requested pagination values into a valid window.

    A missing or non-positive limit becomes DEFAULT_LIMIT; anything above
    MAX_LIMIT is silently reduced to MAX_LIMIT. A missing or negative offset
    becomes 0.
    """
    if not limit or limit <= 0:
        limit = DEFAULT_LIMIT
    limit = min(limit, MAX_LIMIT)
    if not offset or offset < 0:
        offset = 0
    return limit, offset


def paginate(items: List[T], total_count: int, limit: int = DEFAULT_LIMIT,
             offset: int = 0) -> Page[T]:
    return Page(
        items=items,
        total_count=total_count,
        has_more=offset + len(items) < total_count,
        limit=limit,
        offset=offset,
    )


def paginate_query(query: Query, limit: Optional[int] = None,
                   offset: Optional[int] = None) -> Page:
    """
    Count and slice an ordered ORM query.

    The query must already carry its ORDER BY; the count is taken before
    limit/offset are applied.
    """
    limit, offset = get_pagination_params(limit, offset)
    total_count = query.order_by(None).count()
    items = query.offset(offset).limit(limit).all()
    return paginate(items, total_count, limit, offset)
