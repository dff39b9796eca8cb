"""Structured logging for pagination and aggregation.

This module provides telemetry hooks for aggregation runs, emitting
structured log records that carry their fields in ``extra``.
"""

from __future__ import annotations

import logging

from .definitions import AggregationResult

logger = logging.getLogger(__name__)


def log_page_plan(
    *,
    total: int,
    page_size: int,
    total_pages: int,
) -> None:
    """Log page plan creation.

    Args:
        total: Collection size reported by the first page
        page_size: Documents requested per page
        total_pages: Number of pages planned beyond the first one
    """
    logger.info(
        "page_plan_created",
        extra={
            "total": total,
            "page_size": page_size,
            "total_pages": total_pages,
        },
    )


def log_page_completed(
    *,
    mode: str,
    page_index: int,
    offset: int,
    rows: int,
    latency_ms: float | None = None,
) -> None:
    """Log completion of a single page.

    Args:
        mode: Aggregation mode ("parallel" or "sequential")
        page_index: Position of the page in the collection
        offset: Offset the page was requested at
        rows: Number of documents returned
        latency_ms: Latency in milliseconds (optional)
    """
    logger.debug(
        "page_completed",
        extra={
            "mode": mode,
            "page_index": page_index,
            "offset": offset,
            "rows": rows,
            "latency_ms": latency_ms,
        },
    )


def log_page_error(
    *,
    mode: str,
    page_index: int,
    offset: int,
    error: BaseException,
) -> None:
    """Log a failed page request.

    Args:
        mode: Aggregation mode
        page_index: Position of the page that failed
        offset: Offset the page was requested at
        error: Exception raised by the page query
    """
    logger.error(
        "page_error",
        extra={
            "mode": mode,
            "page_index": page_index,
            "offset": offset,
            "error_type": type(error).__name__,
            "error_message": str(error),
        },
    )


def log_aggregation_complete(*, mode: str, result: AggregationResult) -> None:
    """Log completion of an aggregation run.

    Args:
        mode: Aggregation mode
        result: AggregationResult of the run
    """
    logger.info(
        "aggregation_complete",
        extra={
            "mode": mode,
            "count": result.count,
            "total": result.total,
            "pages_used": result.pages_used,
            "latency_ms": result.latency_ms,
        },
    )
