"""Pagination layer for fetching whole collections page by page.

Architecture:
    The paging layer consists of:
    - definitions.py: Configuration and page structures (FetchConfig, PageDescriptor)
    - planners.py: Page planning logic (determines page boundaries)
    - executors.py: Aggregation logic (parallel and sequential strategies)
    - telemetry.py: Structured logging

Usage:
    Both aggregators take a page query, an async callable ``(limit, offset)``
    returning a page of documents together with the collection size.
"""

from __future__ import annotations

from .definitions import (
    DEFAULT_PAGE_SIZE,
    AggregationResult,
    FetchConfig,
    PageDescriptor,
    PageQuery,
    coerce_page,
)
from .executors import ParallelAggregator, SequentialAggregator
from .planners import PagePlanner, plan_pages

__all__ = [
    "DEFAULT_PAGE_SIZE",
    "AggregationResult",
    "FetchConfig",
    "PageDescriptor",
    "PageQuery",
    "PagePlanner",
    "ParallelAggregator",
    "SequentialAggregator",
    "coerce_page",
    "plan_pages",
]
