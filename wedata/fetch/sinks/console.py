"""Console sink printing documents to a text stream."""

from __future__ import annotations

import sys
from collections.abc import Sequence
from typing import Any, TextIO

from ..core.exceptions import SinkError
from .json_array import dump_array


class ConsoleSink:
    """Prints each page of documents as a JSON array on its own line.

    A collection written with ``write_all`` is printed as one array; a
    streamed collection is printed as one array per page.
    """

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream
        self._count = 0
        self._open = False

    @property
    def stream(self) -> TextIO:
        # Resolved lazily so that redirected stdout (e.g. capsys) is honoured.
        return self._stream if self._stream is not None else sys.stdout

    @property
    def count(self) -> int:
        return self._count

    async def write_all(self, documents: Sequence[Any]) -> None:
        await self.open()
        await self.write_page(documents)
        await self.finish()

    async def open(self) -> None:
        if self._open:
            raise SinkError("console sink was already opened")
        self._open = True

    async def write_page(self, documents: Sequence[Any]) -> None:
        if not self._open:
            raise SinkError("console sink is not open")
        self._count += dump_array(documents, self.stream)
        self.stream.write("\n")

    async def finish(self) -> None:
        self.stream.flush()
        self._open = False

    async def abort(self) -> None:
        self.stream.flush()
        self._open = False
