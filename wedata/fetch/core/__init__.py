"""Core components."""

from .enums import Command, FetchMode, SortDirection
from .exceptions import FetchError, PlanningError, SinkError, TransportError

__all__ = [
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
