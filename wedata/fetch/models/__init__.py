"""Data models for search responses.

Architecture:
    Pydantic v2 models validate the payloads returned by the remote search
    API. Documents themselves stay opaque: they are carried as plain
    JSON-compatible values and never validated.
"""

from .page import PageResult

__all__ = ["PageResult"]
