"""
Pagination rules shared by every list endpoint.

Page indexes are 1-based. Page sizes are capped at MAX_PAGE_SIZE.
"""

import math
from dataclasses import dataclass, field
from typing import Generic, List, Sequence, TypeVar

T = TypeVar("T")

DEFAULT_PAGE_INDEX = 1
DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100


@dataclass(frozen=True)
class PageParam:
    """Requested page (1-based index) and page size."""

    page_index: int = DEFAULT_PAGE_INDEX
    page_size: int = DEFAULT_PAGE_SIZE


@dataclass(frozen=True)
class Page(Generic[T]):
    """
    One page of a list query plus the metadata needed to walk the rest.

    Attributes:
        page_index: Index of this page (1-based)
        page_size: Requested page size
        page_count: Total number of pages, 0 when there is no data
        data_count: Total number of matching rows
        data: Rows on this page
    """

    page_index: int
    page_size: int
    page_count: int
    data_count: int
    data: List[T] = field(default_factory=list)


def calculate_offset(page_index: int, page_size: int) -> int:
    """Row offset of the first item on the page. Callers validate page_index >= 1."""
    return (page_index - 1) * page_size


def create_page(page_param: PageParam, data_count: int, data: Sequence[T]) -> Page[T]:
    """
    Build a Page from a query result.

    Args:
        page_param: The requested page
        data_count: Total number of matching rows
        data: Rows for the requested page

    Returns:
        Page with page_count = ceil(data_count / page_size)
    """
    page_count = math.ceil(data_count / page_param.page_size)
    return Page(
        page_index=page_param.page_index,
        page_size=page_param.page_size,
        page_count=page_count,
        data_count=data_count,
        data=list(data),
    )


def is_valid_page_param(page_param: PageParam) -> bool:
    """True iff page_index > 0 and 1 <= page_size <= MAX_PAGE_SIZE."""
    return page_param.page_index > 0 and 0 < page_param.page_size <= MAX_PAGE_SIZE


def create_default_page_param() -> PageParam:
    """Fresh default pagination parameters (page 1, 20 items)."""
    return PageParam(page_index=DEFAULT_PAGE_INDEX, page_size=DEFAULT_PAGE_SIZE)
