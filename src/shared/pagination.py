from __future__ import annotations

from typing import List, Optional, Sequence, Tuple, TypeVar

from src.shared.base import BaseSchema

T = TypeVar("T")

MIN_LIMIT = 1
MAX_LIMIT = 100
DEFAULT_LIMIT = 20


class PaginationState(BaseSchema):
    page: int
    limit: int
    total: int
    total_pages: int
    offset: int
    has_next: bool
    has_prev: bool


def clamp(value: int, lower: int, upper: int) -> int:
    return max(lower, min(value, upper))


def count_pages(total: int, limit: int) -> int:
    return max(1, -(-total // limit))


class PaginationController:
    """Page cursor over ``{page, limit, total}`` that stays within bounds.

    Only ``page``, ``limit`` and ``total`` are stored; everything else is
    derived on read. ``set_page`` and ``set_limit`` keep the page inside
    ``[1, total_pages]``. ``set_total_items`` only replaces the total, so a
    caller shrinking the total should follow it with ``set_page`` to reclamp.
    """

    def __init__(self, initial_page: int = 1, initial_limit: int = DEFAULT_LIMIT, total_items: int = 0) -> None:
        self._initial_limit = clamp(int(initial_limit), MIN_LIMIT, MAX_LIMIT)
        self._initial_page = max(1, int(initial_page))
        self._limit = self._initial_limit
        self._total = max(0, int(total_items))
        self._page = 1
        self.set_page(self._initial_page)

    @property
    def page(self) -> int:
        return self._page

    @property
    def limit(self) -> int:
        return self._limit

    @property
    def total(self) -> int:
        return self._total

    @property
    def total_pages(self) -> int:
        return count_pages(self._total, self._limit)

    @property
    def offset(self) -> int:
        return (self._page - 1) * self._limit

    @property
    def has_next(self) -> bool:
        return self._page < self.total_pages

    @property
    def has_prev(self) -> bool:
        return self._page > 1

    def set_page(self, page: int) -> None:
        self._page = clamp(int(page), 1, self.total_pages)

    def set_limit(self, limit: int) -> None:
        self._limit = clamp(int(limit), MIN_LIMIT, MAX_LIMIT)
        if self._page > self.total_pages:
            self._page = self.total_pages

    def next_page(self) -> None:
        if self.has_next:
            self.set_page(self._page + 1)

    def prev_page(self) -> None:
        if self.has_prev:
            self.set_page(self._page - 1)

    def first_page(self) -> None:
        self.set_page(1)

    def last_page(self) -> None:
        self.set_page(self.total_pages)

    def set_total_items(self, total: int) -> None:
        self._total = max(0, int(total))

    def reset(self) -> None:
        self._limit = self._initial_limit
        self._total = 0
        self.set_page(self._initial_page)

    def state(self) -> PaginationState:
        return PaginationState(
            page=self._page,
            limit=self._limit,
            total=self._total,
            total_pages=self.total_pages,
            offset=self.offset,
            has_next=self.has_next,
            has_prev=self.has_prev,
        )

    def item_range(self) -> Optional[Tuple[int, int]]:
        """1-based first and last item numbers on the current page."""
        if self._total == 0:
            return None
        start = self.offset + 1
        end = min(self._page * self._limit, self._total)
        if start > end:
            return None
        return start, end

    def visible_pages(self, delta: int = 2) -> List[Optional[int]]:
        """Page numbers for a pager widget; ``None`` marks an elided gap."""
        total_pages = self.total_pages
        if total_pages <= 1:
            return [1]
        start = max(2, self._page - delta)
        end = min(total_pages - 1, self._page + delta)
        pages: List[Optional[int]] = [1]
        if start > 2:
            pages.append(None)
        pages.extend(range(start, end + 1))
        if end < total_pages - 1:
            pages.append(None)
        pages.append(total_pages)
        return pages

    def slice(self, items: Sequence[T]) -> List[T]:
        return list(items[self.offset : self.offset + self._limit])
