"""Paging math and the paged result model.

INVARIANT: ``total_pages == ceil(total_records / page_size)`` for every
PagedResult returned by the record service.
"""

from __future__ import annotations

from typing import Generic, TypeVar

from pydantic import BaseModel, Field

from recordkit.errors import InvalidPageError

T = TypeVar("T")


class PagedResult(BaseModel, Generic[T]):
    """One page of records plus the totals of the whole filtered set.

    Storage fills ``items`` and ``total_records``; the record service
    computes ``total_pages``.
    """

    items: list[T] = Field(default_factory=list)
    total_records: int = Field(default=0, ge=0)
    total_pages: int = Field(default=0, ge=0)


def compute_total_pages(total_records: int, page_size: int) -> int:
    """Number of pages needed to show *total_records* rows.

    Examples:
        >>> compute_total_pages(10, 5)
        2
        >>> compute_total_pages(11, 5)
        3
        >>> compute_total_pages(0, 5)
        0

    Raises:
        InvalidPageError: If *page_size* is not positive or
            *total_records* is negative.
    """
    if page_size <= 0:
        raise InvalidPageError(f"page_size must be positive, got {page_size}")
    if total_records < 0:
        raise InvalidPageError(f"total_records must not be negative, got {total_records}")
    pages, remainder = divmod(total_records, page_size)
    return pages + 1 if remainder else pages


def page_offset(page_number: int, page_size: int) -> int:
    """Zero-based row offset of a 1-based *page_number*."""
    if page_number < 1:
        raise InvalidPageError(f"page_number must be at least 1, got {page_number}")
    if page_size <= 0:
        raise InvalidPageError(f"page_size must be positive, got {page_size}")
    return (page_number - 1) * page_size
