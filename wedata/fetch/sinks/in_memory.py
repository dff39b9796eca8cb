"""In-memory sink collecting documents into a list."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from ..core.exceptions import SinkError


class InMemorySink:
    """Collects documents in memory.

    Useful for library callers that want the collection as a list whatever
    the aggregation mode, and for tests.
    """

    def __init__(self) -> None:
        self.documents: list[Any] = []
        self.pages_written = 0
        self.finished = False
        self.aborted = False
        self._open = False

    @property
    def count(self) -> int:
        return len(self.documents)

    async def write_all(self, documents: Sequence[Any]) -> None:
        await self.open()
        await self.write_page(documents)
        await self.finish()

    async def open(self) -> None:
        if self._open or self.finished or self.aborted:
            raise SinkError("in-memory sink was already used")
        self._open = True

    async def write_page(self, documents: Sequence[Any]) -> None:
        if not self._open:
            raise SinkError("in-memory sink is not open")
        self.documents.extend(documents)
        self.pages_written += 1

    async def finish(self) -> None:
        self._open = False
        self.finished = True

    async def abort(self) -> None:
        self._open = False
        self.aborted = True
