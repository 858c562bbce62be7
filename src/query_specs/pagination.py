"""
Page arithmetic and the paged result shape.

``take = 0`` policy: the page size is 0, the page number is 1 and the
result reports a single (empty) page whenever anything matched, i.e.
``total_pages`` is ``0`` for an empty match set and ``1`` otherwise.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from .exceptions import InvalidPaging

T = TypeVar("T")


@dataclass(frozen=True)
class PageInfo:
    page_number: int
    page_size: int
    total_pages: int


def calculate_page(total_count: int, skip: int, take: int) -> PageInfo:
    """
    Derive page metadata from a paging window and the total match count.

    ``page_number = skip // take + 1`` and
    ``total_pages = ceil(total_count / take)``.  A window past the end
    still reports the totals of the full match set.
    """
    for name, value in (("total_count", total_count), ("skip", skip), ("take", take)):
        if value < 0:
            raise InvalidPaging(name, value)

    if take == 0:
        return PageInfo(
            page_number=1,
            page_size=0,
            total_pages=0 if total_count == 0 else 1,
        )
    return PageInfo(
        page_number=skip // take + 1,
        page_size=take,
        total_pages=math.ceil(total_count / take),
    )


@dataclass(frozen=True)
class PagedResult(Generic[T]):
    """One page of results plus metadata about the full match set."""

    items: tuple[T, ...]
    total_count: int
    page_number: int
    page_size: int
    total_pages: int

    @classmethod
    def create(
        cls, items: list[T], total_count: int, skip: int, take: int | None
    ) -> PagedResult[T]:
        """Build a result; without *take* the page size is ``len(items)``."""
        info = calculate_page(
            total_count, skip, take if take is not None else len(items)
        )
        return cls(
            items=tuple(items),
            total_count=total_count,
            page_number=info.page_number,
            page_size=info.page_size,
            total_pages=info.total_pages,
        )

    @property
    def has_next_page(self) -> bool:
        return self.page_number < self.total_pages

    @property
    def has_previous_page(self) -> bool:
        return self.page_number > 1

    def __len__(self) -> int:
        return len(self.items)

    def to_dict(self) -> dict[str, Any]:
        return {
            "items": list(self.items),
            "total_count": self.total_count,
            "page_number": self.page_number,
            "page_size": self.page_size,
            "total_pages": self.total_pages,
        }
