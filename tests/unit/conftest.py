"""Shared fixtures for unit tests."""

from __future__ import annotations

import asyncio

import pytest

from wedata.fetch.models import PageResult


class StubQuery:
    """Deterministic page query over an in-memory collection of ``{"id": n}`` documents.

    Records every call, tracks how many calls are in flight and can be told
    to delay or fail specific offsets.
    """

    def __init__(
        self,
        total: int,
        *,
        delays: dict[int, float] | None = None,
        fail_offsets: set[int] | None = None,
        error: Exception | None = None,
    ) -> None:
        self.documents = [{"id": i} for i in range(total)]
        self.delays = delays or {}
        self.fail_offsets = fail_offsets or set()
        self.error = error or RuntimeError("page request failed")
        self.calls: list[tuple[int, int]] = []
        self.in_flight = 0
        self.max_in_flight = 0
        self.cancelled = 0

    @property
    def offsets(self) -> list[int]:
        return [offset for _, offset in self.calls]

    async def __call__(self, limit: int, offset: int) -> PageResult:
        self.calls.append((limit, offset))
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(self.delays.get(offset, 0))
            if offset in self.fail_offsets:
                raise self.error
            return PageResult(
                documents=self.documents[offset : offset + limit],
                total=len(self.documents),
            )
        except asyncio.CancelledError:
            self.cancelled += 1
            raise
        finally:
            self.in_flight -= 1


@pytest.fixture
def stub_query():
    """Factory for StubQuery instances."""
    return StubQuery
