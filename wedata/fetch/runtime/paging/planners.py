"""Page planning logic for determining page boundaries.

This module provides the PagePlanner class that splits a collection of a
known size into the pages that follow the first one.
"""

from __future__ import annotations

from ...core.exceptions import PlanningError
from .definitions import DEFAULT_PAGE_SIZE, PageDescriptor


class PagePlanner:
    """Plans the pages remaining after the first page of a collection.

    The first page (offset 0) is never planned: it is always requested
    up front because its response reports the collection size.
    """

    def __init__(self, page_size: int = DEFAULT_PAGE_SIZE) -> None:
        """Initialize page planner.

        Args:
            page_size: Number of documents per page

        Raises:
            PlanningError: If page_size is not positive
        """
        if page_size <= 0:
            raise PlanningError(f"page_size must be positive, got {page_size}")
        self._page_size = page_size

    @property
    def page_size(self) -> int:
        return self._page_size

    def plan(self, total: int) -> list[PageDescriptor]:
        """Plan pages for a collection of ``total`` documents.

        Args:
            total: Collection size reported by the first page

        Returns:
            Page descriptors at offsets page_size, 2*page_size, ... < total,
            in ascending offset order

        Raises:
            PlanningError: If total is negative
        """
        if total < 0:
            raise PlanningError(f"total must not be negative, got {total}")

        return [
            PageDescriptor(limit=self._page_size, offset=offset, page_index=index)
            for index, offset in enumerate(
                range(self._page_size, total, self._page_size), start=1
            )
        ]


def plan_pages(total: int, page_size: int) -> list[PageDescriptor]:
    """Plan the pages following the first one; see PagePlanner.plan."""
    return PagePlanner(page_size).plan(total)
