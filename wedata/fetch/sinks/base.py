"""Protocol for output sinks that receive aggregated documents.

Sinks are driven in one of two ways:

- ``write_all(documents)`` writes a complete collection in one operation.
  The parallel aggregator and single-page collections use this.
- ``open()``, then ``write_page(documents)`` once per page in offset order,
  then ``finish()`` on success or ``abort()`` on failure. The sequential
  aggregator streams pages this way.

A sink instance belongs to one aggregation call and is not reused.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class DocumentSink(Protocol):
    """Protocol for document sinks (file, console, in-memory)."""

    @property
    def count(self) -> int:
        """Number of documents written so far."""
        ...

    async def write_all(self, documents: Sequence[Any]) -> None:
        """Write a complete collection and close the sink."""
        ...

    async def open(self) -> None:
        """Start a streamed collection."""
        ...

    async def write_page(self, documents: Sequence[Any]) -> None:
        """Append one page of a streamed collection."""
        ...

    async def finish(self) -> None:
        """Complete a streamed collection and release the destination."""
        ...

    async def abort(self) -> None:
        """Release the destination after a failure, leaving it incomplete."""
        ...
