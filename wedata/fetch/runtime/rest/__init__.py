"""REST runtime abstractions."""

from .http_client import HTTPClient
from .search import CollectionSearch, ConnectionSettings

__all__ = [
    "HTTPClient",
    "CollectionSearch",
    "ConnectionSettings",
]
