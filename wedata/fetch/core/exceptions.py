"""Custom exception hierarchy."""

from __future__ import annotations

from pathlib import Path


class FetchError(Exception):
    """Base exception for all library errors."""

    pass


class PlanningError(FetchError, ValueError):
    """Invalid pagination parameters.

    Raised before any page is requested, e.g. for a non-positive page size
    or a negative record total.
    """

    pass


class TransportError(FetchError):
    """A page request to the remote collection failed.

    Raised by the bundled HTTP search transport. Aggregators never wrap the
    errors of a page query, so custom queries may raise anything.
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code


class SinkError(FetchError):
    """Output destination could not be opened, written or closed."""

    def __init__(self, message: str, path: str | Path | None = None) -> None:
        super().__init__(message)
        self.path = Path(path) if path is not None else None
