"""Facade for fetching whole collections in either aggregation mode.

Architecture:
    CollectionFetcher selects the aggregator from FetchConfig.mode, times the
    run and reports it as a FetchSummary. The two module-level functions
    expose each aggregator directly for library callers that bring their own
    page query.

Design Decisions:
    - Configuration is passed in, never read from module state, so several
      fetches with different settings can run in one process
    - Sinks are created per call and owned by that call
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from time import perf_counter
from typing import Any

from ..core.enums import Command, FetchMode
from ..runtime.paging import (
    DEFAULT_PAGE_SIZE,
    FetchConfig,
    PageQuery,
    ParallelAggregator,
    SequentialAggregator,
)
from ..runtime.rest import CollectionSearch, ConnectionSettings
from ..sinks import ConsoleSink, DocumentSink, FileSink

logger = logging.getLogger(__name__)


async def fetch_all_parallel(
    query: PageQuery,
    page_size: int = DEFAULT_PAGE_SIZE,
    *,
    concurrency: int | None = None,
    sink: DocumentSink | None = None,
) -> list[Any]:
    """Fetch every page concurrently and return the documents in offset order.

    Args:
        query: Page query ``(limit, offset) -> page``
        page_size: Documents requested per page
        concurrency: Maximum pages in flight (None = all remaining pages)
        sink: Optional sink receiving the collection once all pages resolved

    Returns:
        The aggregated collection
    """
    config = FetchConfig(page_size=page_size, concurrency=concurrency)
    result = await ParallelAggregator(config).execute(query, sink=sink)
    return result.documents or []


async def fetch_all_sequential(
    query: PageQuery,
    sink: DocumentSink,
    page_size: int = DEFAULT_PAGE_SIZE,
) -> int:
    """Fetch pages one at a time, streaming each to ``sink``.

    Returns:
        Number of documents written
    """
    config = FetchConfig(page_size=page_size, mode=FetchMode.SEQUENTIAL)
    result = await SequentialAggregator(config).execute(query, sink)
    return result.count


@dataclass
class FetchSummary:
    """Outcome of one fetch.

    Attributes:
        count: Number of documents fetched or written
        elapsed_ms: Wall-clock time of the fetch in milliseconds
        mode: Aggregation mode used
        command: Output command the fetch was run for
    """

    count: int
    elapsed_ms: int
    mode: FetchMode
    command: Command = Command.PRINT

    def summary_line(self) -> str:
        return f"{self.command.verb} {self.count} records in {self.elapsed_ms}ms."


def build_sink(
    command: Command,
    file: str | os.PathLike[str] | None = None,
    *,
    atomic: bool = False,
) -> DocumentSink:
    """Create the sink for an output command.

    Raises:
        ValueError: If ``command`` is SAVE and no file is given
    """
    if command is Command.SAVE:
        if file is None:
            raise ValueError("save requires an output file")
        return FileSink(file, atomic=atomic)
    return ConsoleSink()


class CollectionFetcher:
    """Fetches a whole collection into a sink using the configured mode.

    Example:
        >>> fetcher = CollectionFetcher(FetchConfig(mode=FetchMode.SEQUENTIAL))
        >>> summary = await fetcher.fetch(query, FileSink("movies.json"), command=Command.SAVE)
        >>> print(summary.summary_line())
        Saved 25000 records in 1834ms.
    """

    def __init__(self, config: FetchConfig | None = None) -> None:
        self._config = config or FetchConfig()

    @property
    def config(self) -> FetchConfig:
        return self._config

    async def fetch(
        self,
        query: PageQuery,
        sink: DocumentSink,
        *,
        command: Command = Command.PRINT,
    ) -> FetchSummary:
        """Fetch every page through ``query`` into ``sink``.

        Errors from the query or the sink propagate unchanged.
        """
        start = perf_counter()
        if self._config.mode is FetchMode.SEQUENTIAL:
            result = await SequentialAggregator(self._config).execute(query, sink)
        else:
            result = await ParallelAggregator(self._config).execute(query, sink=sink)

        summary = FetchSummary(
            count=result.count,
            elapsed_ms=round((perf_counter() - start) * 1000),
            mode=self._config.mode,
            command=command,
        )
        logger.debug(
            "fetch_complete",
            extra={"count": summary.count, "elapsed_ms": summary.elapsed_ms, "mode": summary.mode.value},
        )
        return summary

    async def fetch_collection(
        self,
        settings: ConnectionSettings,
        sink: DocumentSink,
        *,
        command: Command = Command.PRINT,
    ) -> FetchSummary:
        """Fetch a remote collection through its search endpoint."""
        async with CollectionSearch(settings) as search:
            return await self.fetch(search, sink, command=command)
