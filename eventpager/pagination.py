"""
Pagination support for eventpager.

This module provides the page structure returned to callers. Cursors are
expressed at transaction granularity so that callers can resume without
ever re-reading part of a transaction.
"""

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass
class PageResult(Generic[T]):
    """
    Represents a single page of results with pagination cursor.

    Attributes:
        items: Events for this page, in source order
        next_cursor: Transaction digest to resume from (exclusive)
        has_more: True if the source reported more events past this page
    """

    items: list[T]
    next_cursor: str | None
    has_more: bool

    @property
    def count(self) -> int:
        """Number of items in this page."""
        return len(self.items)
