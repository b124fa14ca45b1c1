from __future__ import annotations

from math import ceil
from typing import Generic, Optional, Sequence, TypeVar

from sales_dashboard.core.errors import BadRequestError
from sales_dashboard.models.deals import DealSnapshot
from sales_dashboard.shared.base import BaseSchema


T = TypeVar("T")


class Pagination(BaseSchema):
    page: int
    page_size: int
    total_items: int
    total_pages: int


class Meta(BaseSchema):
    as_of_date: str
    source: str
    calculation_version: str
    fiscal_period: Optional[int] = None
    generated_at: Optional[str] = None
    is_stale: Optional[bool] = None


class ResponseEnvelope(BaseSchema, Generic[T]):
    data: T
    pagination: Optional[Pagination] = None
    meta: Optional[Meta] = None


def build_meta(snapshot: DealSnapshot, fiscal_period: Optional[int] = None) -> Meta:
    return Meta(
        as_of_date=snapshot.fetched_at.date().isoformat(),
        source=snapshot.source,
        calculation_version="v1",
        fiscal_period=fiscal_period,
        generated_at=snapshot.fetched_at.isoformat(),
    )


def build_pagination(page: int, page_size: int, total_items: int) -> Pagination:
    total_pages = ceil(total_items / page_size) if page_size else 0
    return Pagination(
        page=page,
        page_size=page_size,
        total_items=total_items,
        total_pages=total_pages,
    )


def paginate_list(items: Sequence[T], page: int, page_size: int) -> tuple[list[T], Pagination]:
    total_items = len(items)
    pagination = build_pagination(page, page_size, total_items)
    if total_items and page > max(pagination.total_pages, 1):
        raise BadRequestError("Page out of range")
    start_index = (page - 1) * page_size
    end_index = start_index + page_size
    return list(items[start_index:end_index]), pagination
