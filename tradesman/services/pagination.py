"""
Paginated list results.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from tradesman.conf import tradesman_settings

T = TypeVar('T')


@dataclass(frozen=True)
class Page(Generic[T]):
    """List response: items, total, page, limit, totalPages."""

    items: list[T]
    total: int
    page: int
    limit: int

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.limit) if self.limit else 0

    def as_dict(self, serialize=None) -> dict[str, Any]:
        items = [serialize(i) for i in self.items] if serialize else list(self.items)
        return {
            'items': items,
            'total': self.total,
            'page': self.page,
            'limit': self.limit,
            'totalPages': self.total_pages,
        }


def paginate(queryset, page: int | None = 1, limit: int | None = None) -> Page:
    """Slice a queryset. page >= 1; limit clamped to [1, MAX_PAGE_SIZE]."""
    page = max(1, int(page or 1))
    limit = int(limit or tradesman_settings.DEFAULT_PAGE_SIZE)
    limit = max(1, min(limit, tradesman_settings.MAX_PAGE_SIZE))

    total = queryset.count()
    offset = (page - 1) * limit
    return Page(
        items=list(queryset[offset:offset + limit]),
        total=total,
        page=page,
        limit=limit,
    )
