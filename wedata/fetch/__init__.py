"""wedata-fetch - fetch whole collections from a paginated search API."""

__version__ = "0.1.0"

from .api import (  # noqa: E402
    CollectionFetcher,
    FetchSummary,
    build_sink,
    fetch_all_parallel,
    fetch_all_sequential,
)
from .core import (  # noqa: E402
    Command,
    FetchError,
    FetchMode,
    PlanningError,
    SinkError,
    SortDirection,
    TransportError,
)
from .models import PageResult  # noqa: E402
from .runtime import (  # noqa: E402
    AggregationResult,
    CollectionSearch,
    ConnectionSettings,
    FetchConfig,
    HTTPClient,
    PageDescriptor,
    PagePlanner,
    PageQuery,
    ParallelAggregator,
    SequentialAggregator,
    plan_pages,
)
from .sinks import (  # noqa: E402
    ConsoleSink,
    DocumentSink,
    FileSink,
    InMemorySink,
    JSONArrayWriter,
)

__all__ = [
    # Aggregation
    "fetch_all_parallel",
    "fetch_all_sequential",
    "CollectionFetcher",
    "FetchSummary",
    "FetchConfig",
    "AggregationResult",
    "ParallelAggregator",
    "SequentialAggregator",
    "PagePlanner",
    "PageDescriptor",
    "PageQuery",
    "plan_pages",
    # Transport
    "CollectionSearch",
    "ConnectionSettings",
    "HTTPClient",
    # Models
    "PageResult",
    # Sinks
    "DocumentSink",
    "ConsoleSink",
    "FileSink",
    "InMemorySink",
    "JSONArrayWriter",
    "build_sink",
    # Enums
    "Command",
    "FetchMode",
    "SortDirection",
    # Exceptions
    "FetchError",
    "PlanningError",
    "SinkError",
    "TransportError",
]
