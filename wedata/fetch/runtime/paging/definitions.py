"""Pagination metadata definitions and configuration structures.

This module defines the data structures shared by the planner and the
aggregators: the fetch configuration, page descriptors, the page query
contract and aggregation results.
"""

from __future__ import annotations

from collections.abc import Awaitable, Mapping
from dataclasses import dataclass
from typing import Any, Protocol

from ...core.enums import FetchMode
from ...core.exceptions import PlanningError
from ...models import PageResult

DEFAULT_PAGE_SIZE = 10000


class PageQuery(Protocol):
    """Async callable returning one page of the collection.

    Implementations must be safe to call concurrently: the parallel
    aggregator keeps several calls in flight at once.
    """

    def __call__(self, limit: int, offset: int) -> Awaitable[PageResult | Mapping[str, Any]]:
        """Fetch ``limit`` documents starting at ``offset``.

        Args:
            limit: Maximum number of documents to return
            offset: Zero-based position of the first document

        Returns:
            A PageResult, or a mapping with ``documents`` and ``total`` keys
        """
        ...


@dataclass(frozen=True)
class FetchConfig:
    """Configuration threaded into every aggregation call.

    Attributes:
        page_size: Number of documents requested per page
        concurrency: Maximum pages in flight in parallel mode (None = all)
        mode: Strategy used to walk the remaining pages
    """

    page_size: int = DEFAULT_PAGE_SIZE
    concurrency: int | None = None
    mode: FetchMode = FetchMode.PARALLEL

    def __post_init__(self) -> None:
        """Validate configuration."""
        if self.page_size <= 0:
            raise PlanningError(f"page_size must be positive, got {self.page_size}")
        if self.concurrency is not None and self.concurrency <= 0:
            raise PlanningError(f"concurrency must be positive, got {self.concurrency}")


@dataclass(frozen=True)
class PageDescriptor:
    """Plan for a single page beyond the first one.

    Attributes:
        limit: Number of documents to request
        offset: Position of the first document of the page
        page_index: Position of the page in the collection (the first page is 0)
    """

    limit: int
    offset: int
    page_index: int = 1


@dataclass
class AggregationResult:
    """Result of an aggregation run.

    Attributes:
        documents: Aggregated documents (None when they were streamed to a sink)
        count: Number of documents aggregated or written
        total: Collection size reported by the first page
        pages_used: Number of pages that were fetched
        latency_ms: Wall-clock time of the run in milliseconds
    """

    documents: list[Any] | None
    count: int
    total: int
    pages_used: int = 1
    latency_ms: float = 0.0


def coerce_page(page: PageResult | Mapping[str, Any]) -> PageResult:
    """Return ``page`` as a PageResult.

    Queries may hand back the decoded response body directly; it is
    validated here so that aggregators only deal with one shape.
    """
    if isinstance(page, PageResult):
        return page
    return PageResult.model_validate(page)
