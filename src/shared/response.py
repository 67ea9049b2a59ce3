from __future__ import annotations

from typing import Generic, Optional, Sequence, TypeVar

from src.shared.base import BaseSchema
from src.shared.pagination import PaginationController


T = TypeVar("T")


class Pagination(BaseSchema):
    page: int
    page_size: int
    total_items: int
    total_pages: int
    offset: int
    has_next: bool
    has_prev: bool


class Meta(BaseSchema):
    as_of_date: str
    source: str
    time_window: str
    calculation_version: str
    reference_time: Optional[str] = None
    skipped_records: Optional[int] = None
    generated_at: Optional[str] = None


class ResponseEnvelope(BaseSchema, Generic[T]):
    data: T
    pagination: Optional[Pagination] = None
    meta: Optional[Meta] = None


def build_pagination(controller: PaginationController) -> Pagination:
    return Pagination(
        page=controller.page,
        page_size=controller.limit,
        total_items=controller.total,
        total_pages=controller.total_pages,
        offset=controller.offset,
        has_next=controller.has_next,
        has_prev=controller.has_prev,
    )


def paginate_list(items: Sequence[T], page: int, page_size: int) -> tuple[list[T], Pagination]:
    controller = PaginationController(initial_limit=page_size, total_items=len(items))
    controller.set_page(page)
    return controller.slice(items), build_pagination(controller)
