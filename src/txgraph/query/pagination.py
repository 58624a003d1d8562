"""Fixed-size pagination over an already-filtered collection."""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Page(Generic[T]):
    """One page of a collection.

    Attributes:
        items: The items on this page.
        page_number: 1-based page number, always within ``[1, total_pages]``.
        page_size: Maximum items per page.
        total_pages: ``max(1, ceil(total_items / page_size))``.
        total_items: Size of the whole (filtered) collection.
    """

    items: list[T]
    page_number: int
    page_size: int
    total_pages: int
    total_items: int

    @property
    def has_previous(self) -> bool:
        return self.page_number > 1

    @property
    def has_next(self) -> bool:
        return self.page_number < self.total_pages


def page_count(total_items: int, page_size: int) -> int:
    """Number of pages needed for *total_items*; never less than 1."""
    return max(1, math.ceil(total_items / page_size))


def paginate(items: Sequence[T], page_number: int, page_size: int) -> Page[T]:
    """Slice *items* into the requested page.

    Out-of-range page numbers are clamped into ``[1, total_pages]`` rather
    than rejected.

    Raises:
        ValueError: If *page_size* is less than 1.
    """
    if page_size < 1:
        raise ValueError(f"page_size must be >= 1, got {page_size}")
    total_pages = page_count(len(items), page_size)
    page_number = min(max(page_number, 1), total_pages)
    start = (page_number - 1) * page_size
    return Page(
        items=list(items[start : start + page_size]),
        page_number=page_number,
        page_size=page_size,
        total_pages=total_pages,
        total_items=len(items),
    )
