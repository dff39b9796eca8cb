"""High-level API for fetching collections."""

from .fetch_api import (
    CollectionFetcher,
    FetchSummary,
    build_sink,
    fetch_all_parallel,
    fetch_all_sequential,
)

__all__ = [
    "CollectionFetcher",
    "FetchSummary",
    "build_sink",
    "fetch_all_parallel",
    "fetch_all_sequential",
]
