"""Aggregation logic for fetching every page of a collection.

This module provides the two aggregators. Both request the first page to
learn the collection size, plan the remaining pages with PagePlanner and
produce documents in ascending offset order:

- ParallelAggregator fetches the remaining pages concurrently through a
  worker pool and materializes the whole collection.
- SequentialAggregator fetches one page at a time and streams each page to
  a sink as soon as it arrives.
"""

from __future__ import annotations

import asyncio
import logging
from time import perf_counter
from typing import Any

from ...core.enums import FetchMode
from ...models import PageResult
from ...sinks.base import DocumentSink
from .definitions import AggregationResult, FetchConfig, PageDescriptor, PageQuery, coerce_page
from .planners import PagePlanner
from .telemetry import (
    log_aggregation_complete,
    log_page_completed,
    log_page_error,
    log_page_plan,
)

logger = logging.getLogger(__name__)


class _Aggregator:
    """Shared page fetching for both aggregation modes."""

    mode: FetchMode

    def __init__(self, config: FetchConfig | None = None) -> None:
        """Initialize aggregator.

        Args:
            config: Fetch configuration (defaults to FetchConfig())
        """
        self._config = config or FetchConfig()
        self._planner = PagePlanner(self._config.page_size)

    @property
    def config(self) -> FetchConfig:
        return self._config

    async def _fetch_first(self, query: PageQuery) -> PageResult:
        first = await self._fetch(query, PageDescriptor(self._config.page_size, 0, page_index=0))
        logger.info("Total records %d", first.total)
        return first

    async def _fetch(self, query: PageQuery, plan: PageDescriptor) -> PageResult:
        start = perf_counter()
        try:
            page = coerce_page(await query(plan.limit, plan.offset))
        except Exception as e:
            log_page_error(
                mode=self.mode.value,
                page_index=plan.page_index,
                offset=plan.offset,
                error=e,
            )
            raise
        log_page_completed(
            mode=self.mode.value,
            page_index=plan.page_index,
            offset=plan.offset,
            rows=len(page.documents),
            latency_ms=(perf_counter() - start) * 1000.0,
        )
        return page

    def _plan(self, total: int) -> list[PageDescriptor]:
        plans = self._planner.plan(total)
        log_page_plan(total=total, page_size=self._config.page_size, total_pages=len(plans))
        return plans


class ParallelAggregator(_Aggregator):
    """Fetches the remaining pages concurrently and concatenates them.

    Pages beyond the first are handed to a pool of workers pulling
    descriptors from a shared queue. Each result is stored in the slot of
    its descriptor, so the collection comes out in offset order whatever the
    order in which responses arrive. Without a concurrency limit the pool
    has one worker per page and every page is in flight at once.
    """

    mode = FetchMode.PARALLEL

    async def execute(
        self,
        query: PageQuery,
        *,
        sink: DocumentSink | None = None,
    ) -> AggregationResult:
        """Fetch the whole collection.

        Args:
            query: Page query returning one page of the collection
            sink: Optional sink receiving the whole collection once every
                page resolved

        Returns:
            AggregationResult holding the documents

        Raises:
            Exception: The first error raised by a page query; nothing is
                written to the sink in that case
        """
        logger.info("Start fetching")
        start = perf_counter()

        first = await self._fetch_first(query)
        documents: list[Any] = list(first.documents)
        pages_used = 1

        if not first.is_complete:
            plans = self._plan(first.total)
            pages = await self._fetch_pool(query, plans)
            for page in pages:
                documents.extend(page.documents)
            pages_used += len(pages)

        if sink is not None:
            await sink.write_all(documents)

        result = AggregationResult(
            documents=documents,
            count=len(documents),
            total=first.total,
            pages_used=pages_used,
            latency_ms=(perf_counter() - start) * 1000.0,
        )
        log_aggregation_complete(mode=self.mode.value, result=result)
        return result

    async def _fetch_pool(self, query: PageQuery, plans: list[PageDescriptor]) -> list[PageResult]:
        slots: list[PageResult | None] = [None] * len(plans)
        queue: asyncio.Queue[tuple[int, PageDescriptor]] = asyncio.Queue()
        for slot, plan in enumerate(plans):
            queue.put_nowait((slot, plan))

        async def worker() -> None:
            while True:
                try:
                    slot, plan = queue.get_nowait()
                except asyncio.QueueEmpty:
                    return
                slots[slot] = await self._fetch(query, plan)

        size = min(self._config.concurrency or len(plans), len(plans))
        workers = [asyncio.create_task(worker()) for _ in range(size)]
        try:
            await asyncio.gather(*workers)
        except BaseException:
            # First failure wins; stop the pages still in flight.
            for task in workers:
                task.cancel()
            await asyncio.gather(*workers, return_exceptions=True)
            raise

        return [page for page in slots if page is not None]


class SequentialAggregator(_Aggregator):
    """Fetches pages one at a time and streams them to a sink.

    Only one page is held in memory and only one request is in flight at
    any time. Pages are written strictly in offset order.
    """

    mode = FetchMode.SEQUENTIAL

    async def execute(self, query: PageQuery, sink: DocumentSink) -> AggregationResult:
        """Fetch the whole collection into ``sink``.

        Args:
            query: Page query returning one page of the collection
            sink: Sink receiving the documents page by page

        Returns:
            AggregationResult with the number of documents written

        Raises:
            Exception: The first error raised by a page query or the sink.
                The sink is aborted and keeps what was written so far.
        """
        logger.info("Start fetching")
        start = perf_counter()

        first = await self._fetch_first(query)
        pages_used = 1

        if first.is_complete:
            await sink.write_all(first.documents)
            count = len(first.documents)
        else:
            plans = self._plan(first.total)
            await sink.open()
            try:
                await sink.write_page(first.documents)
                count = len(first.documents)
                for plan in plans:
                    page = await self._fetch(query, plan)
                    await sink.write_page(page.documents)
                    count += len(page.documents)
                    pages_used += 1
            except BaseException:
                await sink.abort()
                raise
            await sink.finish()

        result = AggregationResult(
            documents=None,
            count=count,
            total=first.total,
            pages_used=pages_used,
            latency_ms=(perf_counter() - start) * 1000.0,
        )
        log_aggregation_complete(mode=self.mode.value, result=result)
        return result
