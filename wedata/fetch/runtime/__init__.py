"""Runtime components: pagination and the HTTP search transport."""

from .paging import (
    AggregationResult,
    FetchConfig,
    PageDescriptor,
    PagePlanner,
    PageQuery,
    ParallelAggregator,
    SequentialAggregator,
    plan_pages,
)
from .rest import CollectionSearch, ConnectionSettings, HTTPClient

__all__ = [
    "AggregationResult",
    "CollectionSearch",
    "ConnectionSettings",
    "FetchConfig",
    "HTTPClient",
    "PageDescriptor",
    "PagePlanner",
    "PageQuery",
    "ParallelAggregator",
    "SequentialAggregator",
    "plan_pages",
]
